"""Services module"""
from fintrack.services.asset import AssetService
from fintrack.services.asset_tree import AssetForest
from fintrack.services.depreciation import apply_depreciation, depreciated_value
from fintrack.services.months import parse_month, month_key, shift_month, current_month
from fintrack.services.projection import (
    build_month_axis,
    build_projection,
    user_projection,
    add_previous_month,
    add_next_month,
    remove_month,
)
from fintrack.services.summary import net_worth_summary, summarize_valuations
from fintrack.services.valuation import upsert_valuation, delete_month_valuations
from fintrack.services.visibility import collapse, expand, get_descendant_ids

__all__ = [
    "AssetService",
    "AssetForest",
    "apply_depreciation",
    "depreciated_value",
    "parse_month",
    "month_key",
    "shift_month",
    "current_month",
    "build_month_axis",
    "build_projection",
    "user_projection",
    "add_previous_month",
    "add_next_month",
    "remove_month",
    "net_worth_summary",
    "summarize_valuations",
    "upsert_valuation",
    "delete_month_valuations",
    "collapse",
    "expand",
    "get_descendant_ids",
]
