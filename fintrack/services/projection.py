"""Asset grid projection

Builds what the assets page renders: the month axis, one row per group and per
visible item (depth indented, parents first), and the net-worth footer with
month-over-month growth.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.database.models import AssetGroup, PinnedMonth
from fintrack.services.asset import AssetService
from fintrack.services.asset_tree import AssetForest
from fintrack.services.depreciation import apply_depreciation
from fintrack.services.months import current_month, shift_month
from fintrack.services.valuation import delete_month_valuations

logger = logging.getLogger(__name__)

# Growth colour is fully saturated from 10% up
FULL_INTENSITY_PERCENT = 10.0


def build_month_axis(
    valuation_months: Iterable[date],
    pinned_months: Iterable[date] = (),
    today: Optional[date] = None,
) -> List[date]:
    """Months with any valuation, the current month and pinned months, newest first."""
    months = set(valuation_months) | set(pinned_months) | {current_month(today)}
    return sorted(months, reverse=True)


def previous_month_for(axis: List[date], today: Optional[date] = None) -> date:
    """Month before the oldest displayed one (the current month on an empty axis)."""
    if not axis:
        return current_month(today)
    return shift_month(axis[-1], -1)


def next_month_for(axis: List[date], today: Optional[date] = None) -> date:
    """Month after the newest displayed one (the current month on an empty axis)."""
    if not axis:
        return current_month(today)
    return shift_month(axis[0], 1)


def growth_cell(current: float, previous: Optional[float]) -> Dict:
    """Footer cell for one month compared with the next older displayed month."""
    if previous is None:
        return {"growth": None, "growth_percent": None, "intensity": 0.0, "tone": "neutral"}

    growth = current - previous
    if previous == 0:
        return {"growth": growth, "growth_percent": None, "intensity": 0.0, "tone": "neutral"}

    percent = growth / previous * 100
    intensity = min(abs(percent) / FULL_INTENSITY_PERCENT, 1.0)
    if percent > 0:
        tone = "positive"
    elif percent < 0:
        tone = "negative"
    else:
        tone = "neutral"
    return {"growth": growth, "growth_percent": percent, "intensity": intensity, "tone": tone}


def build_projection(groups: List, months: List[date]) -> Dict:
    """Rows and footer for the given groups over an already built month axis."""
    forest = AssetForest.from_groups(groups)

    rows: List[Dict] = []
    for group in groups:
        rows.append({
            "kind": "group",
            "depth": 0,
            "group_id": group.id,
            "item_id": None,
            "name": group.name,
            "is_leaf": False,
            "has_children": bool(forest.roots(group.id)),
            "has_visible_children": bool(forest.roots(group.id, include_hidden=False)),
            "cells": [{"month": m, "value": forest.group_total(group.id, m)} for m in months],
        })
        for item, depth in forest.preorder(group.id):
            rows.append({
                "kind": "item",
                "depth": depth,
                "group_id": group.id,
                "item_id": item.id,
                "name": item.name,
                "is_leaf": forest.is_leaf(item.id),
                "has_children": not forest.is_leaf(item.id),
                "has_visible_children": forest.has_visible_children(item.id),
                "cells": [
                    {"month": m, "value": forest.value_for(item.id, m, include_hidden=True)}
                    for m in months
                ],
            })

    net_worth = {m: sum((forest.group_total(g.id, m) for g in groups), 0.0) for m in months}
    footer: List[Dict] = []
    for i, m in enumerate(months):
        previous = net_worth[months[i + 1]] if i + 1 < len(months) else None
        footer.append({"month": m, "net_worth": net_worth[m], **growth_cell(net_worth[m], previous)})

    return {"months": months, "rows": rows, "footer": footer}


def load_pinned_months(db: Session, user_id: int) -> List[date]:
    return [row[0] for row in db.query(PinnedMonth.month).filter(PinnedMonth.user_id == user_id).all()]


def pin_month(db: Session, user_id: int, month: date) -> None:
    exists = db.query(PinnedMonth).filter(PinnedMonth.user_id == user_id, PinnedMonth.month == month).first()
    if exists:
        return
    db.add(PinnedMonth(user_id=user_id, month=month))
    try:
        db.commit()
    except IntegrityError:
        # pinned concurrently by another request
        db.rollback()


def unpin_month(db: Session, user_id: int, month: date) -> int:
    removed = (
        db.query(PinnedMonth)
        .filter(PinnedMonth.user_id == user_id, PinnedMonth.month == month)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed


def month_axis_for_user(db: Session, user_id: int, groups: List[AssetGroup], today: Optional[date] = None) -> List[date]:
    return build_month_axis(AssetForest.from_groups(groups).months(), load_pinned_months(db, user_id), today)


def user_projection(db: Session, user_id: int, today: Optional[date] = None) -> Dict:
    groups = AssetService.load_groups(db, user_id)
    months = month_axis_for_user(db, user_id, groups, today)
    return build_projection(groups, months)


def add_previous_month(db: Session, user_id: int, today: Optional[date] = None) -> date:
    """Page back in time: the earlier month is only pinned, past months are never depreciated."""
    groups = AssetService.load_groups(db, user_id)
    month = previous_month_for(month_axis_for_user(db, user_id, groups, today), today)
    pin_month(db, user_id, month)
    return month


def add_next_month(db: Session, user_id: int, today: Optional[date] = None) -> Dict:
    """
    Page forward in time: roll depreciation into the new month, then pin it.

    The roll-forward is best-effort. When it fails the month is pinned anyway
    and the result says so, so displayed and stored values may differ until
    the user fixes the cells by hand.
    """
    groups = AssetService.load_groups(db, user_id)
    month = next_month_for(month_axis_for_user(db, user_id, groups, today), today)

    applied = 0
    failed = False
    try:
        applied = apply_depreciation(db, user_id, month)
    except SQLAlchemyError:
        db.rollback()
        failed = True
        logger.warning("[Projection] depreciation failed for user=%s month=%s, pinning anyway", user_id, month, exc_info=True)

    pin_month(db, user_id, month)
    return {"month": month, "applied": applied, "depreciation_failed": failed}


def remove_month(db: Session, user_id: int, month: date) -> Dict:
    """Drop a month from the grid: delete the user's valuations for it and unpin it."""
    unpinned = unpin_month(db, user_id, month)
    deleted = delete_month_valuations(db, user_id, month)
    return {"month": month, "deleted": deleted, "unpinned": bool(unpinned)}
