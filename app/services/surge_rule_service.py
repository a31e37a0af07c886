# app/services/surge_rule_service.py
"""
Surge rule administration: list / create / update / delete.
Every write is validated, then the written rule is checked for overlapping
bands within its scope. Overlaps raise an alert but are still saved.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.models.surge_rule import SurgePricingRule
from app.services.alert_service import create_alert
from app.services.rule_validation import validate_rule_bounds, find_overlapping_rules
from app.services.surge_pricing import SurgeRule
from app.utils.logger import get_logger

logger = get_logger(__name__)

RULE_FIELDS = ("lot_id", "min_occupancy_percent", "max_occupancy_percent", "multiplier", "is_active")
NULLABLE_FIELDS = {"lot_id"}          # None → global rule


class RuleNotFoundError(LookupError):
    pass


def list_rules(db: Session, active_only: bool = False, lot_id: Optional[str] = None) -> list[SurgePricingRule]:
    """Rules ordered by band start, the order the resolver scans them in."""
    q = db.query(SurgePricingRule)
    if active_only:
        q = q.filter(SurgePricingRule.is_active == True)  # noqa: E712
    if lot_id:
        q = q.filter(SurgePricingRule.lot_id == lot_id)
    return q.order_by(SurgePricingRule.min_occupancy_percent.asc()).all()


def load_active_rules(db: Session) -> list[SurgeRule]:
    return [SurgeRule.from_model(row) for row in list_rules(db, active_only=True)]


def get_rule(db: Session, rule_id: int) -> SurgePricingRule:
    rule = db.query(SurgePricingRule).filter(SurgePricingRule.id == rule_id).first()
    if not rule:
        raise RuleNotFoundError(f"Surge rule {rule_id} not found")
    return rule


async def create_rule(db: Session, data: dict) -> SurgePricingRule:
    validate_rule_bounds(data["min_occupancy_percent"], data["max_occupancy_percent"], data["multiplier"])
    rule = SurgePricingRule(
        lot_id=data.get("lot_id"),
        min_occupancy_percent=data["min_occupancy_percent"],
        max_occupancy_percent=data["max_occupancy_percent"],
        multiplier=data["multiplier"],
        is_active=data.get("is_active", True),
        created_at=datetime.utcnow(),
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    logger.info(f"Surge rule created: {rule!r}")
    await check_overlaps(db, rule.id)
    return rule


async def update_rule(db: Session, rule_id: int, changes: dict) -> SurgePricingRule:
    """
    Partial update. Bounds are validated on the merged result before anything is written.
    An explicit None only means something for lot_id; for other fields it is ignored.
    """
    rule = get_rule(db, rule_id)
    changes = {f: v for f, v in changes.items() if v is not None or f in NULLABLE_FIELDS}
    merged = {f: changes.get(f, getattr(rule, f)) for f in RULE_FIELDS}
    validate_rule_bounds(merged["min_occupancy_percent"], merged["max_occupancy_percent"], merged["multiplier"])

    for field in RULE_FIELDS:
        if field in changes:
            setattr(rule, field, changes[field])
    db.commit()
    logger.info(f"Surge rule updated: {rule!r}")
    await check_overlaps(db, rule.id)
    return rule


def delete_rule(db: Session, rule_id: int):
    rule = get_rule(db, rule_id)
    db.delete(rule)
    db.commit()
    logger.info(f"Surge rule {rule_id} deleted")


async def check_overlaps(db: Session, rule_id: int) -> list[tuple[SurgeRule, SurgeRule]]:
    """Alert on overlaps involving rule_id only; older overlaps were alerted when they were written."""
    overlaps = [
        (a, b) for a, b in find_overlapping_rules(load_active_rules(db))
        if rule_id in (a.rule_id, b.rule_id)
    ]
    for first, second in overlaps:
        desc = (f"Overlapping surge bands in {first.scope}: rule {first.rule_id} "
                f"[{first.min_occupancy_percent}, {first.max_occupancy_percent}) and rule {second.rule_id} "
                f"[{second.min_occupancy_percent}, {second.max_occupancy_percent}); first match wins")
        lot_id = None if first.is_global else first.scope.split(":", 1)[1]
        await create_alert(db, "surge_rule_overlap", desc, lot_id=lot_id, rule_id=rule_id)
    return overlaps
