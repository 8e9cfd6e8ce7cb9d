"""Valuation routes spanning all of a user's items"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fintrack.api.deps import get_current_user_id
from fintrack.api.schemas import AppliedResponse, DeletedResponse, MonthPayload, SummaryResponse
from fintrack.database.config import get_db
from fintrack.services.depreciation import apply_depreciation
from fintrack.services.months import parse_month
from fintrack.services.summary import net_worth_summary
from fintrack.services.valuation import delete_month_valuations

router = APIRouter()


@router.delete("", response_model=DeletedResponse)
async def delete_month(
    month: str = Query(default=""),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete all of the caller's valuations for `month`."""
    if not month:
        raise HTTPException(status_code=400, detail="month required (YYYY-MM-01)")
    return {"deleted": delete_month_valuations(db, user_id, parse_month(month))}


@router.post("/apply-depreciation", response_model=AppliedResponse)
async def apply_month_depreciation(
    payload: MonthPayload,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Roll depreciating leaf items forward into `month`."""
    if not payload.month:
        raise HTTPException(status_code=400, detail="Month parameter required")
    return {"applied": apply_depreciation(db, user_id, parse_month(payload.month))}


@router.get("/summary", response_model=SummaryResponse)
async def valuation_summary(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Latest net worth, its history and the per-group split of the latest month."""
    return net_worth_summary(db, user_id)
