# app/routers/pricing.py
"""Price quotes per lot (badge + checkout) and lot occupancy updates."""

from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.pricing import QuoteRequest, PriceQuoteOut, OccupancyAdjust, LotOccupancyOut
from app.services import pricing_service
from app.services.pricing_service import LotNotFoundError
from app.services.surge_pricing import SurgeRule

router = APIRouter()


@router.get("/pricing/lots", response_model=list[PriceQuoteOut], summary="Current price for every lot")
def get_all_lot_prices(db: Session = Depends(get_db)):
    return [asdict(q) for q in pricing_service.quote_all_lots(db)]


@router.get("/pricing/lots/{lot_id}", response_model=PriceQuoteOut, summary="Current price for one lot")
def get_lot_price(lot_id: str, db: Session = Depends(get_db)):
    try:
        return asdict(pricing_service.quote_lot(db, lot_id))
    except LotNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/pricing/quote", response_model=PriceQuoteOut, summary="Quote from supplied inputs")
def quote_price(body: QuoteRequest):
    """Resolves a price without touching the database. Invalid inputs fall back to base price."""
    rules = [SurgeRule(**r.model_dump()) for r in body.rules or []]
    result = pricing_service.quote(body.base_price, body.current_occupancy, body.capacity,
                                   rules, body.facility_id)
    return asdict(result)


@router.put("/lots/{lot_id}/occupancy", response_model=LotOccupancyOut, summary="Apply check-in/out delta")
async def adjust_lot_occupancy(lot_id: str, body: OccupancyAdjust, db: Session = Depends(get_db)):
    try:
        return await pricing_service.adjust_occupancy(db, lot_id, body.delta)
    except LotNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
