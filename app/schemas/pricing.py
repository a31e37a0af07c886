# app/schemas/pricing.py
from pydantic import BaseModel
from typing import Optional


class SurgeRuleIn(BaseModel):
    scope: str = "global"                 # "global" | "facility:<lot id>"
    min_occupancy_percent: float
    max_occupancy_percent: float
    multiplier: float
    active: bool = True


class QuoteRequest(BaseModel):
    base_price: float
    current_occupancy: int
    capacity: int
    rules: Optional[list[SurgeRuleIn]] = None
    facility_id: Optional[str] = None


class PriceQuoteOut(BaseModel):
    lot_id: Optional[str]
    base_price: float
    price: float
    multiplier: float
    is_surge: bool
    occupancy_percent: Optional[float]
    tier: str
    surge_percent: int

    class Config:
        from_attributes = True


class OccupancyAdjust(BaseModel):
    delta: int


class LotOccupancyOut(BaseModel):
    id: str
    name: str
    capacity: int
    current_occupancy: int

    class Config:
        from_attributes = True
