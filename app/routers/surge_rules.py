# app/routers/surge_rules.py
"""Surge pricing rule administration endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from app.database import get_db
from app.schemas.surge_rule import SurgeRuleCreate, SurgeRuleUpdate, SurgeRuleOut, SurgeRuleOverlapOut
from app.services import surge_rule_service
from app.services.rule_validation import RuleValidationError, find_overlapping_rules
from app.services.surge_rule_service import RuleNotFoundError

router = APIRouter()


@router.get("/surge-rules", response_model=list[SurgeRuleOut], summary="List surge rules")
def list_surge_rules(active_only: bool = False, lot_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Ordered by min occupancy, the order prices are resolved in."""
    return surge_rule_service.list_rules(db, active_only=active_only, lot_id=lot_id)


@router.post("/surge-rules", response_model=SurgeRuleOut, summary="Create a surge rule")
async def create_surge_rule(body: SurgeRuleCreate, db: Session = Depends(get_db)):
    try:
        return await surge_rule_service.create_rule(db, body.model_dump())
    except RuleValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/surge-rules/{rule_id}", response_model=SurgeRuleOut, summary="Update a surge rule")
async def update_surge_rule(rule_id: int, body: SurgeRuleUpdate, db: Session = Depends(get_db)):
    """Only fields present in the body are changed."""
    try:
        return await surge_rule_service.update_rule(db, rule_id, body.model_dump(exclude_unset=True))
    except RuleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/surge-rules/{rule_id}", summary="Delete a surge rule")
def delete_surge_rule(rule_id: int, db: Session = Depends(get_db)):
    try:
        surge_rule_service.delete_rule(db, rule_id)
    except RuleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "deleted", "rule_id": rule_id}


@router.get("/surge-rules/overlaps", response_model=list[SurgeRuleOverlapOut],
            summary="Active rules whose bands overlap within a scope")
def list_overlaps(db: Session = Depends(get_db)):
    overlaps = find_overlapping_rules(surge_rule_service.load_active_rules(db))
    return [
        SurgeRuleOverlapOut(
            scope=a.scope,
            first_rule_id=a.rule_id,
            second_rule_id=b.rule_id,
            first_band=[a.min_occupancy_percent, a.max_occupancy_percent],
            second_band=[b.min_occupancy_percent, b.max_occupancy_percent],
        )
        for a, b in overlaps
    ]
