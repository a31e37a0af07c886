# app/models/transaction.py
"""
Parking payment transactions.
amount is what was actually charged, i.e. the surge-resolved price.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime
from app.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(String(64), index=True)
    amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="pending")   # pending | completed | failed
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Transaction {self.id} lot={self.lot_id} amount={self.amount} status={self.status}>"
