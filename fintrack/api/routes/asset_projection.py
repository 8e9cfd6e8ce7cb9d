"""Asset grid routes: the projection the assets page renders and its month paging"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fintrack.api.deps import get_current_user_id
from fintrack.api.schemas import PagedMonthResponse, ProjectionResponse, RemovedMonthResponse
from fintrack.database.config import get_db
from fintrack.services.months import parse_month
from fintrack.services.projection import add_next_month, add_previous_month, remove_month, user_projection

router = APIRouter()


@router.get("", response_model=ProjectionResponse)
async def get_projection(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return user_projection(db, user_id)


@router.post("/months/previous", response_model=PagedMonthResponse)
async def page_previous_month(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Add the month before the oldest displayed one (no depreciation)."""
    return {"month": add_previous_month(db, user_id)}


@router.post("/months/next", response_model=PagedMonthResponse)
async def page_next_month(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Add the month after the newest displayed one, rolling depreciation into it first."""
    return add_next_month(db, user_id)


@router.delete("/months/{month}", response_model=RemovedMonthResponse)
async def drop_month(month: str, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Delete the caller's valuations for the month and take it off the axis."""
    return remove_month(db, user_id, parse_month(month))
