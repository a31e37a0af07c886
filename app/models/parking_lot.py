# app/models/parking_lot.py
"""
Parking lots table.
Holds the base hourly rate and the live occupancy fed to surge pricing.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime
from app.database import Base


class ParkingLot(Base):
    __tablename__ = "parking_lots"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    hourly_rate = Column(Float, nullable=False)
    capacity = Column(Integer, default=0, nullable=False)
    current_occupancy = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ParkingLot {self.id} {self.current_occupancy}/{self.capacity} rate={self.hourly_rate}>"
