# app/services/revenue_impact_service.py
"""
Surge revenue impact: how much of collected revenue came from surge pricing.

Each completed transaction is compared with its lot's base hourly rate
(one hour of parking assumed); anything above the base is surge revenue.
Results are grouped per calendar day.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from app.config import settings
from app.models.parking_lot import ParkingLot
from app.models.surge_rule import SurgePricingRule
from app.models.transaction import Transaction
from app.services.surge_pricing import round_half_up
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class DailySurgeRevenue:
    date: str
    actual_revenue: float = 0.0
    base_revenue: float = 0.0
    surge_revenue: float = 0.0
    transaction_count: int = 0


@dataclass
class SurgeRevenueImpact:
    daily: list[DailySurgeRevenue]
    totals: DailySurgeRevenue
    surge_percentage: float
    avg_surge_multiplier: float
    active_surge_rules: int = 0
    days: int = field(default=0)


def _round_to(value: float, digits: int) -> float:
    """Half-up rounding to a fixed number of decimals (12.25 → 12.3)."""
    scale = 10 ** digits
    return round_half_up(value * scale) / scale


def summarize_surge_revenue(transactions, lot_rates: dict, active_rules: int = 0,
                            default_rate: float = None) -> SurgeRevenueImpact:
    """
    transactions: iterable of objects with amount, created_at, lot_id
    lot_rates:    lot_id → hourly rate; unknown lots use default_rate
    """
    if default_rate is None:
        default_rate = settings.DEFAULT_BASE_RATE

    by_date: dict[str, DailySurgeRevenue] = {}
    for tx in transactions:
        day = tx.created_at.strftime("%Y-%m-%d")
        base = lot_rates.get(tx.lot_id) or default_rate
        amount = float(tx.amount)

        bucket = by_date.setdefault(day, DailySurgeRevenue(date=day))
        bucket.actual_revenue += amount
        bucket.base_revenue += base
        bucket.surge_revenue += max(0.0, amount - base)
        bucket.transaction_count += 1

    daily = [by_date[d] for d in sorted(by_date)]
    totals = DailySurgeRevenue(
        date="total",
        actual_revenue=sum(d.actual_revenue for d in daily),
        base_revenue=sum(d.base_revenue for d in daily),
        surge_revenue=sum(d.surge_revenue for d in daily),
        transaction_count=sum(d.transaction_count for d in daily),
    )

    if totals.base_revenue > 0:
        surge_pct = _round_to(totals.surge_revenue / totals.base_revenue * 100, 1)
        avg_multiplier = _round_to(totals.actual_revenue / totals.base_revenue, 2)
    else:
        surge_pct, avg_multiplier = 0.0, 1.0

    return SurgeRevenueImpact(daily=daily, totals=totals, surge_percentage=surge_pct,
                              avg_surge_multiplier=avg_multiplier, active_surge_rules=active_rules)


def get_surge_revenue_impact(db: Session, days: int = None) -> SurgeRevenueImpact:
    days = days or settings.REVENUE_WINDOW_DAYS
    since = datetime.utcnow() - timedelta(days=days)

    transactions = db.query(Transaction).filter(
        Transaction.created_at >= since,
        Transaction.status == "completed",
    ).all()
    lot_rates = {lot.id: lot.hourly_rate for lot in db.query(ParkingLot).all()}
    active_rules = db.query(SurgePricingRule).filter(SurgePricingRule.is_active == True).count()  # noqa: E712

    impact = summarize_surge_revenue(transactions, lot_rates, active_rules)
    impact.days = days
    logger.info(f"Surge impact over {days}d: {impact.totals.transaction_count} tx, "
                f"+{impact.surge_percentage}% over base")
    return impact
