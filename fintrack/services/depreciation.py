"""Depreciation roll-forward

For a target month every leaf item with a monthly depreciation amount gets
`max(0, latest prior value - depreciation)`. Months that already hold a value
for the item are left alone, so running the same month twice writes nothing
the second time (and does not correct an earlier value either).
"""
import logging
from datetime import date
from typing import Dict, List

from sqlalchemy.orm import Session

from fintrack.database.config import conflict_insert
from fintrack.database.models import AssetGroup, AssetItem, AssetValuation

logger = logging.getLogger(__name__)


def depreciated_value(previous_value: float, depreciation_amount: float) -> float:
    """Floor at zero, never negative."""
    return max(0.0, previous_value - depreciation_amount)


def apply_depreciation(db: Session, user_id: int, target_month: date) -> int:
    """
    Roll depreciating leaf items of a user forward into `target_month`.

    Returns:
        number of valuations inserted
    """
    items = (
        db.query(AssetItem)
        .join(AssetGroup, AssetItem.group_id == AssetGroup.id)
        .filter(
            AssetGroup.user_id == user_id,
            AssetItem.depreciation_amount.isnot(None),
            ~AssetItem.children.any(),
        )
        .all()
    )
    if not items:
        logger.info("[Depreciation] user=%s month=%s: no depreciating leaf items", user_id, target_month)
        return 0

    item_ids = [item.id for item in items]

    # Latest valuation strictly before the target month, per item
    previous: Dict[int, float] = {}
    prior_rows = (
        db.query(AssetValuation.item_id, AssetValuation.value)
        .filter(AssetValuation.item_id.in_(item_ids), AssetValuation.month < target_month)
        .order_by(AssetValuation.item_id, AssetValuation.month.desc())
        .all()
    )
    for item_id, value in prior_rows:
        previous.setdefault(item_id, float(value))

    rows: List[dict] = []
    for item in items:
        previous_value = previous.get(item.id)
        if previous_value is None:
            continue  # nothing to depreciate from
        if previous_value <= 0:
            continue
        rows.append({
            "item_id": item.id,
            "month": target_month,
            "value": depreciated_value(previous_value, float(item.depreciation_amount)),
        })

    applied = 0
    if rows:
        table = AssetValuation.__table__
        # rows already valued for the month (entered by hand or a concurrent run) are kept
        stmt = conflict_insert(db, table).values(rows).on_conflict_do_nothing(
            index_elements=[table.c.item_id, table.c.month],
        )
        applied = db.execute(stmt).rowcount
        db.commit()

    logger.info(
        "[Depreciation] user=%s month=%s candidates=%s applied=%s",
        user_id, target_month, len(items), applied,
    )
    return applied
