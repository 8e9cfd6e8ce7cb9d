"""Asset group routes"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from fintrack.api.deps import get_current_user_id
from fintrack.api.schemas import GroupPayload, GroupResponse, ItemCreate, ItemResponse
from fintrack.database.config import get_db
from fintrack.database.models import AssetGroup, AssetItem
from fintrack.services.asset import AssetService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[GroupResponse])
async def list_groups(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Groups with their items and valuations; hidden items included, the client decides what to show."""
    return AssetService.load_groups(db, user_id)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    payload: GroupPayload,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    group = AssetGroup(user_id=user_id, name=payload.name)
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("[AssetGroups] created group=%s user=%s", group.id, user_id)
    return group


@router.put("/{group_id}", response_model=GroupResponse)
async def rename_group(
    group_id: int,
    payload: GroupPayload,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    group = AssetService.get_owned_group(db, user_id, group_id)
    group.name = payload.name
    db.commit()
    db.refresh(group)
    return group


@router.delete("/{group_id}", status_code=204)
async def delete_group(group_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Delete a group together with its items and their valuations."""
    group = AssetService.get_owned_group(db, user_id, group_id)
    db.delete(group)
    db.commit()
    logger.info("[AssetGroups] deleted group=%s user=%s", group_id, user_id)
    return Response(status_code=204)


@router.post("/{group_id}/items", response_model=ItemResponse, status_code=201)
async def create_root_item(
    group_id: int,
    payload: ItemCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    group = AssetService.get_owned_group(db, user_id, group_id)
    item = AssetItem(
        group_id=group.id,
        name=payload.name,
        description=payload.description,
        depreciation_amount=payload.depreciation_amount,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item
