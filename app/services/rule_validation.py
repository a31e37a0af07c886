# app/services/rule_validation.py
"""
Checks applied when surge rules are written, not when prices are resolved.
Overlapping bands are reported as warnings; the resolver still takes the
first match per scope.
"""

from itertools import combinations

from app.services.surge_pricing import SurgeRule, round_half_up


class RuleValidationError(ValueError):
    pass


def validate_rule_bounds(min_occupancy_percent: float, max_occupancy_percent: float, multiplier: float):
    if min_occupancy_percent < 0:
        raise RuleValidationError("Min occupancy cannot be negative")
    if min_occupancy_percent >= max_occupancy_percent:
        raise RuleValidationError("Min occupancy must be less than max occupancy")
    if multiplier < 1:
        raise RuleValidationError("Multiplier must be at least 1.0")


def bands_overlap(a: SurgeRule, b: SurgeRule) -> bool:
    # Half-open bands: [80, 100) and [100, 120) only touch
    return a.min_occupancy_percent < b.max_occupancy_percent and b.min_occupancy_percent < a.max_occupancy_percent


def find_overlapping_rules(rules: list[SurgeRule]) -> list[tuple[SurgeRule, SurgeRule]]:
    """Pairs of active rules in the same scope whose bands intersect, in input order."""
    active = [r for r in rules if r.active]
    return [
        (a, b) for a, b in combinations(active, 2)
        if a.scope == b.scope and bands_overlap(a, b)
    ]


def multiplier_tier(multiplier: float) -> str:
    if multiplier >= 2:
        return "extreme"
    if multiplier >= 1.5:
        return "high"
    if multiplier > 1:
        return "elevated"
    return "none"


def surge_percent(multiplier: float) -> int:
    """Badge text value, e.g. 1.4 → 40 (shown as +40%). Halves round up."""
    return round_half_up((multiplier - 1) * 100)
