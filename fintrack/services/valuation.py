"""Valuation store: one value per (item, month)"""
import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fintrack.database.config import conflict_insert
from fintrack.database.models import AssetGroup, AssetItem, AssetValuation
from fintrack.services.errors import NonLeafValuationError

logger = logging.getLogger(__name__)


def upsert_valuation(db: Session, item: AssetItem, month: date, value: float) -> AssetValuation:
    """
    Create or overwrite the valuation of a leaf item for a month.

    The write is a single INSERT .. ON CONFLICT (item_id, month) DO UPDATE, so
    two overlapping saves of the same cell both succeed and the last one wins.

    Raises:
        NonLeafValuationError: the item currently has children
    """
    child_count = db.query(AssetItem).filter(AssetItem.parent_item_id == item.id).count()
    if child_count > 0:
        raise NonLeafValuationError(item.id)

    table = AssetValuation.__table__
    stmt = conflict_insert(db, table).values(item_id=item.id, month=month, value=value)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.item_id, table.c.month],
        set_={"value": stmt.excluded.value, "updated_at": func.now()},
    )
    db.execute(stmt)
    db.commit()

    valuation = db.query(AssetValuation).filter(
        AssetValuation.item_id == item.id,
        AssetValuation.month == month,
    ).one()
    logger.info("[Valuations] item=%s month=%s value=%s", item.id, month, value)
    return valuation


def _owned_item_ids(user_id: int):
    return (
        select(AssetItem.id)
        .join(AssetGroup, AssetItem.group_id == AssetGroup.id)
        .where(AssetGroup.user_id == user_id)
    )


def delete_month_valuations(db: Session, user_id: int, month: date) -> int:
    """Delete every valuation of the month on items the user owns; other users are untouched."""
    deleted = (
        db.query(AssetValuation)
        .filter(
            AssetValuation.month == month,
            AssetValuation.item_id.in_(_owned_item_ids(user_id)),
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("[Valuations] deleted %s valuations for user=%s month=%s", deleted, user_id, month)
    return deleted
