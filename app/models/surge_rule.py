# app/models/surge_rule.py
"""
Surge pricing rules table.
One row per occupancy band [min, max). lot_id NULL = applies to every lot.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime
from app.database import Base


class SurgePricingRule(Base):
    __tablename__ = "surge_pricing_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(String(64), index=True)          # NULL → global rule
    min_occupancy_percent = Column(Float, nullable=False)
    max_occupancy_percent = Column(Float, nullable=False)
    multiplier = Column(Float, nullable=False, default=1.0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime)

    def __repr__(self):
        scope = self.lot_id or "global"
        return (f"<SurgePricingRule {self.id} {scope} "
                f"[{self.min_occupancy_percent}, {self.max_occupancy_percent}) x{self.multiplier}>")
