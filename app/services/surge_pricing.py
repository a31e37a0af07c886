# app/services/surge_pricing.py
"""
Surge price resolution.

Maps a lot's live occupancy onto occupancy-banded multiplier rules and
returns the price to display or charge. Pure and stateless: the caller
fetches rules and occupancy, this module only decides.

Selection:
  1. occupancy_percent = current / capacity * 100 (not clamped, overbooking
     can exceed 100)
  2. first active rule scoped to the lot whose band [min, max) contains it
  3. first active global rule whose band contains it
  4. lot rule beats global rule, regardless of order or band width
Any missing or invalid input yields the baseline (no-surge) decision.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)

GLOBAL_SCOPE = "global"
FACILITY_SCOPE_PREFIX = "facility:"


def facility_scope(facility_id) -> str:
    return f"{FACILITY_SCOPE_PREFIX}{facility_id}"


@dataclass(frozen=True)
class SurgeRule:
    scope: str                     # "global" | "facility:<lot id>"
    min_occupancy_percent: float   # inclusive
    max_occupancy_percent: float   # exclusive
    multiplier: float
    active: bool = True
    rule_id: Optional[int] = None

    @property
    def is_global(self) -> bool:
        return self.scope == GLOBAL_SCOPE

    def matches(self, occupancy_percent: float) -> bool:
        return self.min_occupancy_percent <= occupancy_percent < self.max_occupancy_percent

    @classmethod
    def from_model(cls, row) -> "SurgeRule":
        """Build from a SurgePricingRule row. A NULL lot_id means the rule is global."""
        scope = GLOBAL_SCOPE if row.lot_id is None else facility_scope(row.lot_id)
        return cls(
            scope=scope,
            min_occupancy_percent=float(row.min_occupancy_percent),
            max_occupancy_percent=float(row.max_occupancy_percent),
            multiplier=float(row.multiplier),
            active=bool(row.is_active),
            rule_id=row.id,
        )


@dataclass(frozen=True)
class PricingDecision:
    price: int
    multiplier: float
    is_surge: bool


def round_half_up(value: float) -> int:
    """Currency rounding: exact .5 goes up (37.5 → 38)."""
    return int(math.floor(value + 0.5))


def occupancy_percent(current_occupancy, capacity) -> Optional[float]:
    if not capacity:
        return None
    try:
        return (current_occupancy / capacity) * 100
    except OverflowError:
        # int / int too large for a float
        return None


def baseline_decision(base_price) -> PricingDecision:
    return PricingDecision(price=base_price, multiplier=1, is_surge=False)


def _first_match(rules, scope: str, pct: float) -> Optional[SurgeRule]:
    for rule in rules:
        if rule.active and rule.scope == scope and rule.matches(pct):
            return rule
    return None


def calculate_surge_price(
    base_price,
    current_occupancy,
    capacity,
    rules: Optional[Iterable[SurgeRule]],
    facility_id=None,
) -> PricingDecision:
    """Resolve the effective price for one lot. Never raises."""
    if not rules:
        return baseline_decision(base_price)
    try:
        if capacity <= 0:
            return baseline_decision(base_price)
        pct = occupancy_percent(current_occupancy, capacity)
        rules = list(rules)

        candidate = None
        if facility_id is not None:
            candidate = _first_match(rules, facility_scope(facility_id), pct)
        if candidate is None:
            candidate = _first_match(rules, GLOBAL_SCOPE, pct)
        if candidate is None:
            return baseline_decision(base_price)

        multiplier = float(candidate.multiplier)
        decision = PricingDecision(
            price=round_half_up(base_price * multiplier),
            multiplier=multiplier,
            is_surge=multiplier > 1,
        )
    except (TypeError, ValueError, AttributeError, ArithmeticError) as e:
        logger.debug(f"Surge resolution fell back to base price: {e}")
        return baseline_decision(base_price)

    logger.debug(
        f"Surge {candidate.scope} [{candidate.min_occupancy_percent}, "
        f"{candidate.max_occupancy_percent}) x{multiplier} at {pct:.1f}% → {decision.price}"
    )
    return decision
