# app/services/alert_service.py
"""
Shared alert creation service.
Used by surge_rule_service (overlapping bands) and pricing_service (lot nearly full).
"""

from datetime import datetime
from sqlalchemy.orm import Session
from app.models.alert import Alert
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def create_alert(db: Session, alert_type, description, lot_id=None, rule_id=None):
    """Create and persist an alert record. Always commits immediately."""
    db.add(Alert(alert_type=alert_type, lot_id=lot_id, rule_id=rule_id,
                 description=description, is_resolved=0, triggered_at=datetime.utcnow()))
    db.commit()
    logger.warning(f"[ALERT][{alert_type.upper()}] {description}")


def resolve_alert(db: Session, alert: Alert):
    alert.is_resolved = 1
    alert.resolved_at = datetime.utcnow()
    db.commit()
    logger.info(f"Alert {alert.id} resolved")
