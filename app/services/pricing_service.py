# app/services/pricing_service.py
"""
Live price quotes per lot + occupancy adjustments.
Fetches lot and active rules, then hands them to the surge resolver.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.models.parking_lot import ParkingLot
from app.services.alert_service import create_alert
from app.services.rule_validation import multiplier_tier, surge_percent
from app.services.surge_pricing import PricingDecision, SurgeRule, calculate_surge_price, occupancy_percent
from app.services.surge_rule_service import load_active_rules
from app.utils.logger import get_logger

logger = get_logger(__name__)


class LotNotFoundError(LookupError):
    pass


@dataclass
class LotPriceQuote:
    lot_id: Optional[str]
    base_price: float
    price: int
    multiplier: float
    is_surge: bool
    occupancy_percent: Optional[float]
    tier: str
    surge_percent: int


def build_quote(decision: PricingDecision, base_price, current_occupancy, capacity, lot_id=None) -> LotPriceQuote:
    pct = occupancy_percent(current_occupancy, capacity) if capacity and capacity > 0 else None
    return LotPriceQuote(
        lot_id=lot_id,
        base_price=base_price,
        price=decision.price,
        multiplier=decision.multiplier,
        is_surge=decision.is_surge,
        occupancy_percent=round(pct, 1) if pct is not None else None,
        tier=multiplier_tier(decision.multiplier),
        surge_percent=surge_percent(decision.multiplier),
    )


def quote(base_price, current_occupancy, capacity, rules: list[SurgeRule], lot_id=None) -> LotPriceQuote:
    """Stateless quote for caller-supplied inputs."""
    decision = calculate_surge_price(base_price, current_occupancy, capacity, rules, lot_id)
    return build_quote(decision, base_price, current_occupancy, capacity, lot_id)


def _quote_lot_with_rules(lot: ParkingLot, rules: list[SurgeRule]) -> LotPriceQuote:
    base_price = lot.hourly_rate or settings.DEFAULT_BASE_RATE
    result = quote(base_price, lot.current_occupancy, lot.capacity, rules, lot.id)
    if result.is_surge:
        logger.info(f"Surge active at {lot.id}: {base_price} → {result.price} (x{result.multiplier})")
    return result


def get_lot(db: Session, lot_id: str) -> ParkingLot:
    lot = db.query(ParkingLot).filter(ParkingLot.id == lot_id).first()
    if not lot:
        raise LotNotFoundError(f"Parking lot '{lot_id}' not found")
    return lot


def quote_lot(db: Session, lot_id: str) -> LotPriceQuote:
    lot = get_lot(db, lot_id)
    return _quote_lot_with_rules(lot, load_active_rules(db))


def quote_all_lots(db: Session) -> list[LotPriceQuote]:
    """One rule fetch shared across every lot."""
    rules = load_active_rules(db)
    lots = db.query(ParkingLot).order_by(ParkingLot.name).all()
    return [_quote_lot_with_rules(lot, rules) for lot in lots]


async def adjust_occupancy(db: Session, lot_id: str, delta: int) -> ParkingLot:
    """Apply a check-in (+) / check-out (-) delta, clamped to [0, capacity]."""
    lot = get_lot(db, lot_id)
    was_full = _is_nearly_full(lot)
    lot.current_occupancy = max(0, min(lot.capacity, lot.current_occupancy + delta))
    lot.updated_at = datetime.utcnow()
    db.commit()
    logger.info(f"{lot_id}: {lot.current_occupancy}/{lot.capacity}")

    if not was_full and _is_nearly_full(lot):
        await create_alert(db, "occupancy_full",
                           f"Lot {lot_id} at {int(lot.current_occupancy / lot.capacity * 100)}% capacity",
                           lot_id=lot_id)
    return lot


def _is_nearly_full(lot: ParkingLot) -> bool:
    return bool(lot.capacity) and (lot.current_occupancy / lot.capacity) >= settings.OCCUPANCY_ALERT_THRESHOLD
