# app/schemas/revenue.py
from pydantic import BaseModel


class DailySurgeRevenueOut(BaseModel):
    date: str
    actual_revenue: float
    base_revenue: float
    surge_revenue: float
    transaction_count: int

    class Config:
        from_attributes = True


class SurgeRevenueImpactOut(BaseModel):
    days: int
    daily: list[DailySurgeRevenueOut]
    totals: DailySurgeRevenueOut
    surge_percentage: float
    avg_surge_multiplier: float
    active_surge_rules: int

    class Config:
        from_attributes = True
