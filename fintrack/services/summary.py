"""Net worth summary for the dashboard, computed from the stored valuations."""
from typing import Dict, List, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from fintrack.database.models import AssetGroup, AssetItem, AssetValuation
from fintrack.services.months import month_key


def summarize_valuations(rows: List[Tuple]) -> Dict:
    """
    Aggregate (month, value, group name) rows.

    Returns:
        net_worth: total of the latest month whose total is not zero
        net_worth_history: non-zero monthly totals, oldest first
        asset_allocation: per-group totals of that latest month
    """
    empty = {"net_worth": 0.0, "net_worth_history": [], "asset_allocation": []}
    if not rows:
        return empty

    df = pd.DataFrame(rows, columns=["month", "value", "group"])
    df["value"] = df["value"].astype(float)
    df["group"] = df["group"].fillna("Other")

    totals = df.groupby("month")["value"].sum().sort_index()
    non_zero = totals[totals != 0]
    if non_zero.empty:
        return empty

    latest = non_zero.index[-1]
    allocation = df[df["month"] == latest].groupby("group")["value"].sum()

    return {
        "net_worth": float(non_zero.iloc[-1]),
        "net_worth_history": [{"date": month_key(m), "value": float(v)} for m, v in non_zero.items()],
        "asset_allocation": [{"name": name, "value": float(v)} for name, v in allocation.items()],
    }


def net_worth_summary(db: Session, user_id: int) -> Dict:
    rows = (
        db.query(AssetValuation.month, AssetValuation.value, AssetGroup.name)
        .join(AssetItem, AssetValuation.item_id == AssetItem.id)
        .join(AssetGroup, AssetItem.group_id == AssetGroup.id)
        .filter(AssetGroup.user_id == user_id)
        .order_by(AssetValuation.month)
        .all()
    )
    return summarize_valuations([tuple(row) for row in rows])
