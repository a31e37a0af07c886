# tests/test_pricing_service.py
"""Unit tests for lot price quotes and occupancy adjustments."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, AsyncMock, patch
from app.services.pricing_service import LotNotFoundError, adjust_occupancy, quote, quote_all_lots, quote_lot
from app.services.surge_pricing import GLOBAL_SCOPE, SurgeRule, facility_scope


def make_lot(lot_id="lot-1", rate=20, capacity=100, occupancy=95, name="Central"):
    lot = MagicMock()
    lot.id = lot_id
    lot.name = name
    lot.hourly_rate = rate
    lot.capacity = capacity
    lot.current_occupancy = occupancy
    return lot


GLOBAL_90 = SurgeRule(scope=GLOBAL_SCOPE, min_occupancy_percent=90, max_occupancy_percent=100, multiplier=1.4)


class TestQuote:
    def test_surge_quote_fields(self):
        q = quote(20, 95, 100, [GLOBAL_90])
        assert q.price == 28
        assert q.is_surge is True
        assert q.occupancy_percent == 95.0
        assert q.tier == "elevated"
        assert q.surge_percent == 40

    def test_huge_occupancy_quote_falls_back(self):
        q = quote(20, 10 ** 400, 3, [GLOBAL_90])
        assert q.price == 20
        assert q.occupancy_percent is None

    def test_zero_capacity_quote(self):
        q = quote(20, 10, 0, [GLOBAL_90])
        assert q.price == 20
        assert q.occupancy_percent is None
        assert q.tier == "none"


class TestQuoteLot:
    def test_lot_rule_applied_by_lot_id(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = make_lot("lot-7", occupancy=95)
        lot_rule = SurgeRule(scope=facility_scope("lot-7"), min_occupancy_percent=90,
                             max_occupancy_percent=100, multiplier=2.0)

        with patch("app.services.pricing_service.load_active_rules", return_value=[GLOBAL_90, lot_rule]):
            q = quote_lot(db, "lot-7")

        assert q.lot_id == "lot-7"
        assert q.multiplier == 2.0
        assert q.price == 40
        assert q.tier == "extreme"

    def test_missing_lot(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None

        with pytest.raises(LotNotFoundError):
            quote_lot(db, "nope")

    def test_missing_rate_uses_default(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = make_lot(rate=None, occupancy=10)

        with patch("app.services.pricing_service.load_active_rules", return_value=[]):
            q = quote_lot(db, "lot-1")

        assert q.base_price == 20.0
        assert q.is_surge is False

    def test_quote_all_lots_fetches_rules_once(self):
        db = MagicMock()
        db.query.return_value.order_by.return_value.all.return_value = [
            make_lot("a", occupancy=95), make_lot("b", occupancy=10),
        ]

        with patch("app.services.pricing_service.load_active_rules", return_value=[GLOBAL_90]) as mock_rules:
            quotes = quote_all_lots(db)
            mock_rules.assert_called_once()

        assert [q.is_surge for q in quotes] == [True, False]


class TestAdjustOccupancy:
    @pytest.mark.asyncio
    async def test_check_in_increments(self):
        lot = make_lot(capacity=100, occupancy=10)
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = lot

        with patch("app.services.pricing_service.create_alert", new_callable=AsyncMock) as mock_alert:
            await adjust_occupancy(db, "lot-1", 3)
            mock_alert.assert_not_called()

        assert lot.current_occupancy == 13
        db.commit.assert_called()

    @pytest.mark.asyncio
    async def test_clamped_to_capacity_and_zero(self):
        lot = make_lot(capacity=10, occupancy=9)
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = lot

        with patch("app.services.pricing_service.create_alert", new_callable=AsyncMock):
            await adjust_occupancy(db, "lot-1", 5)
            assert lot.current_occupancy == 10
            await adjust_occupancy(db, "lot-1", -50)
            assert lot.current_occupancy == 0

    @pytest.mark.asyncio
    async def test_alert_when_crossing_threshold(self):
        lot = make_lot(capacity=10, occupancy=8)
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = lot

        with patch("app.services.pricing_service.create_alert", new_callable=AsyncMock) as mock_alert:
            await adjust_occupancy(db, "lot-1", 1)
            mock_alert.assert_called_once()
            assert mock_alert.call_args.args[1] == "occupancy_full"

    @pytest.mark.asyncio
    async def test_no_repeat_alert_while_already_full(self):
        lot = make_lot(capacity=10, occupancy=9)
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = lot

        with patch("app.services.pricing_service.create_alert", new_callable=AsyncMock) as mock_alert:
            await adjust_occupancy(db, "lot-1", 1)
            mock_alert.assert_not_called()
