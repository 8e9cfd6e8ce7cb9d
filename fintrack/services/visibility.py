"""Collapse / expand of asset subtrees

Only the `hidden` flag of the descendants changes, never the item itself and
never any valuation. Expand shows every descendant, it does not restore the
state from before a collapse.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from fintrack.database.models import AssetItem

logger = logging.getLogger(__name__)


def get_descendant_ids(db: Session, root_id: int) -> List[int]:
    """Breadth-first walk over parent_item_id links, one query per level."""
    ids: List[int] = []
    seen = {root_id}
    frontier = [root_id]
    while frontier:
        children = db.query(AssetItem.id).filter(AssetItem.parent_item_id.in_(frontier)).all()
        child_ids = [row[0] for row in children if row[0] not in seen]
        if not child_ids:
            break
        seen.update(child_ids)
        ids.extend(child_ids)
        frontier = child_ids
    return ids


def set_subtree_hidden(db: Session, item: AssetItem, hidden: bool) -> int:
    """Set `hidden` on every descendant of the item in one batch; returns the rows updated."""
    descendant_ids = get_descendant_ids(db, item.id)
    if not descendant_ids:
        return 0

    updated = (
        db.query(AssetItem)
        .filter(AssetItem.id.in_(descendant_ids))
        .update({AssetItem.hidden: hidden}, synchronize_session=False)
    )
    db.commit()
    logger.info("[Visibility] %s item=%s descendants=%s", "collapse" if hidden else "expand", item.id, updated)
    return updated


def collapse(db: Session, item: AssetItem) -> int:
    return set_subtree_hidden(db, item, True)


def expand(db: Session, item: AssetItem) -> int:
    return set_subtree_hidden(db, item, False)
