"""Asset item routes: nesting, edits, collapse/expand and valuations"""
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from fintrack.api.deps import get_current_user_id
from fintrack.api.schemas import (
    ChildCreate,
    ItemResponse,
    ItemUpdate,
    UpdatedResponse,
    ValuationPayload,
    ValuationResponse,
)
from fintrack.database.config import get_db
from fintrack.database.models import AssetItem
from fintrack.services.asset import AssetService
from fintrack.services.months import parse_month
from fintrack.services.valuation import upsert_valuation
from fintrack.services.visibility import collapse, expand

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    payload: ItemUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Partial update; only the fields present in the body change."""
    item = AssetService.get_owned_item(db, user_id, item_id)

    update_data = payload.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    if update_data.get("hidden") is None:
        update_data.pop("hidden", None)
    for key, value in update_data.items():
        setattr(item, key, value)

    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Delete an item, its subtree and their valuations."""
    item = AssetService.get_owned_item(db, user_id, item_id)
    db.delete(item)
    db.commit()
    logger.info("[AssetItems] deleted item=%s user=%s", item_id, user_id)
    return Response(status_code=204)


@router.post("/{item_id}/children", response_model=ItemResponse, status_code=201)
async def create_child_item(
    item_id: int,
    payload: ChildCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """New child under an item; it joins the parent's group."""
    parent = AssetService.get_owned_item(db, user_id, item_id)
    child = AssetItem(
        group_id=parent.group_id,
        parent_item_id=parent.id,
        name=payload.name,
        description=payload.description,
    )
    db.add(child)
    db.commit()
    db.refresh(child)
    return child


@router.post("/{item_id}/collapse", response_model=UpdatedResponse)
async def collapse_item(item_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Hide every descendant of the item (not the item itself)."""
    item = AssetService.get_owned_item(db, user_id, item_id)
    return {"updated": collapse(db, item)}


@router.post("/{item_id}/expand", response_model=UpdatedResponse)
async def expand_item(item_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Show every descendant of the item."""
    item = AssetService.get_owned_item(db, user_id, item_id)
    return {"updated": expand(db, item)}


@router.post("/{item_id}/valuations", response_model=ValuationResponse, status_code=201)
async def set_valuation(
    item_id: int,
    payload: ValuationPayload,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Upsert the value of a leaf item for a month; 400 when the item has children."""
    item = AssetService.get_owned_item(db, user_id, item_id)
    month = parse_month(payload.month)
    return upsert_valuation(db, item, month, payload.value)
