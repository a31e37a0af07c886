# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + how many surge rules are live.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.models.surge_rule import SurgePricingRule
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "active_surge_rules": None,
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
        result["active_surge_rules"] = (
            db.query(SurgePricingRule).filter(SurgePricingRule.is_active == True).count()  # noqa: E712
        )
    except Exception as e:
        # Health must answer even with the DB down
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
