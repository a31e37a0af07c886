# tests/test_rule_validation.py
"""Unit tests for surge rule validation and overlap detection."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.services.rule_validation import (
    RuleValidationError, find_overlapping_rules, multiplier_tier, surge_percent, validate_rule_bounds,
)
from app.services.surge_pricing import GLOBAL_SCOPE, SurgeRule, facility_scope


def rule(low, high, scope=GLOBAL_SCOPE, active=True, rule_id=None):
    return SurgeRule(scope=scope, min_occupancy_percent=low, max_occupancy_percent=high,
                     multiplier=1.5, active=active, rule_id=rule_id)


class TestValidateRuleBounds:
    def test_valid_rule_passes(self):
        validate_rule_bounds(70, 100, 1.5)

    def test_min_not_below_max(self):
        with pytest.raises(RuleValidationError, match="less than max"):
            validate_rule_bounds(90, 90, 1.5)

    def test_multiplier_below_one(self):
        with pytest.raises(RuleValidationError, match="at least 1.0"):
            validate_rule_bounds(70, 100, 0.8)

    def test_negative_min(self):
        with pytest.raises(RuleValidationError):
            validate_rule_bounds(-5, 50, 1.2)


class TestOverlaps:
    def test_touching_bands_do_not_overlap(self):
        assert find_overlapping_rules([rule(80, 100), rule(100, 120)]) == []

    def test_overlap_in_same_scope(self):
        a, b = rule(50, 90, rule_id=1), rule(80, 100, rule_id=2)
        assert find_overlapping_rules([a, b]) == [(a, b)]

    def test_different_scopes_never_overlap(self):
        assert find_overlapping_rules([rule(50, 100), rule(50, 100, scope=facility_scope("lot-1"))]) == []

    def test_inactive_rules_ignored(self):
        assert find_overlapping_rules([rule(50, 100), rule(60, 70, active=False)]) == []

    def test_nested_band(self):
        outer, inner = rule(0, 100), rule(40, 60)
        assert find_overlapping_rules([outer, inner]) == [(outer, inner)]


class TestBadgeHelpers:
    @pytest.mark.parametrize("multiplier,tier", [
        (2.5, "extreme"), (2.0, "extreme"), (1.5, "high"), (1.2, "elevated"), (1.0, "none"),
    ])
    def test_multiplier_tier(self, multiplier, tier):
        assert multiplier_tier(multiplier) == tier

    def test_surge_percent(self):
        assert surge_percent(1.4) == 40
        assert surge_percent(1.0) == 0
        assert surge_percent(2.0) == 100
        assert surge_percent(1.125) == 13
