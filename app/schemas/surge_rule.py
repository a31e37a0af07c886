# app/schemas/surge_rule.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SurgeRuleCreate(BaseModel):
    lot_id: Optional[str] = None          # None → global rule
    min_occupancy_percent: float = 70
    max_occupancy_percent: float = 100
    multiplier: float = 1.5
    is_active: bool = True


class SurgeRuleUpdate(BaseModel):
    lot_id: Optional[str] = None
    min_occupancy_percent: Optional[float] = None
    max_occupancy_percent: Optional[float] = None
    multiplier: Optional[float] = None
    is_active: Optional[bool] = None


class SurgeRuleOut(BaseModel):
    id: int
    lot_id: Optional[str]
    min_occupancy_percent: float
    max_occupancy_percent: float
    multiplier: float
    is_active: bool
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class SurgeRuleOverlapOut(BaseModel):
    scope: str
    first_rule_id: Optional[int]
    second_rule_id: Optional[int]
    first_band: list[float] = Field(description="[min, max) of the rule that wins")
    second_band: list[float]
