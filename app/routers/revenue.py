# app/routers/revenue.py
"""Surge revenue impact for the admin dashboard."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.revenue import SurgeRevenueImpactOut
from app.services.revenue_impact_service import get_surge_revenue_impact

router = APIRouter()


@router.get("/revenue/surge-impact", response_model=SurgeRevenueImpactOut, summary="Revenue uplift from surge pricing")
def surge_impact(days: Optional[int] = Query(None, ge=1, le=365), db: Session = Depends(get_db)):
    """Look-back defaults to REVENUE_WINDOW_DAYS."""
    return get_surge_revenue_impact(db, days)
