# tests/test_revenue_impact_service.py
"""Unit tests for the surge revenue impact summary."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock
from app.services.revenue_impact_service import get_surge_revenue_impact, summarize_surge_revenue


def tx(amount, day, lot_id="lot-1", hour=10):
    return SimpleNamespace(amount=amount, lot_id=lot_id, created_at=datetime(2026, 3, day, hour, 0))


class TestSummarizeSurgeRevenue:
    def test_empty(self):
        impact = summarize_surge_revenue([], {})
        assert impact.daily == []
        assert impact.totals.actual_revenue == 0
        assert impact.surge_percentage == 0.0
        assert impact.avg_surge_multiplier == 1.0

    def test_grouped_and_sorted_by_day(self):
        txs = [tx(30, 5), tx(20, 4), tx(28, 5, hour=18)]
        impact = summarize_surge_revenue(txs, {"lot-1": 20})

        assert [d.date for d in impact.daily] == ["2026-03-04", "2026-03-05"]
        day5 = impact.daily[1]
        assert day5.transaction_count == 2
        assert day5.actual_revenue == 58
        assert day5.base_revenue == 40
        assert day5.surge_revenue == 18

    def test_totals_and_ratios(self):
        txs = [tx(30, 1), tx(20, 1), tx(30, 2)]
        impact = summarize_surge_revenue(txs, {"lot-1": 20}, active_rules=3)

        assert impact.totals.actual_revenue == 80
        assert impact.totals.base_revenue == 60
        assert impact.totals.surge_revenue == 20
        assert impact.surge_percentage == pytest.approx(33.3)
        assert impact.avg_surge_multiplier == pytest.approx(1.33)
        assert impact.active_surge_rules == 3

    def test_percentage_rounds_half_up(self):
        impact = summarize_surge_revenue([tx(17, 1)], {"lot-1": 16})
        # 1 / 16 = 6.25%
        assert impact.surge_percentage == pytest.approx(6.3)

    def test_discounted_transaction_adds_no_negative_surge(self):
        impact = summarize_surge_revenue([tx(10, 1)], {"lot-1": 20})
        assert impact.totals.surge_revenue == 0

    def test_unknown_lot_uses_default_rate(self):
        impact = summarize_surge_revenue([tx(30, 1, lot_id="ghost")], {}, default_rate=25)
        assert impact.totals.base_revenue == 25
        assert impact.totals.surge_revenue == 5


class TestGetSurgeRevenueImpact:
    def test_queries_and_summarizes(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.all.return_value = [tx(30, 1)]
        db.query.return_value.all.return_value = [SimpleNamespace(id="lot-1", hourly_rate=20)]
        db.query.return_value.filter.return_value.count.return_value = 2

        impact = get_surge_revenue_impact(db, days=7)

        assert impact.days == 7
        assert impact.totals.surge_revenue == 10
        assert impact.active_surge_rules == 2
