"""Pydantic models shared by the asset routes (camelCase on the wire)."""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # float fields reject NaN and Infinity
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )


# ==================== Requests ====================

class GroupPayload(CamelModel):
    name: str = Field(min_length=1)


class ItemCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    depreciation_amount: Optional[float] = None


class ChildCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class ItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    hidden: Optional[bool] = None
    depreciation_amount: Optional[float] = None


class ValuationPayload(CamelModel):
    month: str  # YYYY-MM-01 or YYYY-MM
    value: float


class MonthPayload(CamelModel):
    month: str


# ==================== Responses ====================

class ValuationResponse(CamelModel):
    id: int
    item_id: int
    month: date
    value: float


class ItemResponse(CamelModel):
    id: int
    group_id: int
    parent_item_id: Optional[int]
    name: str
    description: Optional[str]
    hidden: bool
    depreciation_amount: Optional[float]
    created_at: Optional[datetime] = None
    valuations: List[ValuationResponse] = []


class GroupResponse(CamelModel):
    id: int
    user_id: int
    name: str
    created_at: Optional[datetime] = None
    items: List[ItemResponse] = []


class UpdatedResponse(CamelModel):
    updated: int


class DeletedResponse(CamelModel):
    deleted: int


class AppliedResponse(CamelModel):
    applied: int


class CellResponse(CamelModel):
    month: date
    value: float


class ProjectionRow(CamelModel):
    kind: str  # group, item
    depth: int
    group_id: int
    item_id: Optional[int]
    name: str
    is_leaf: bool
    has_children: bool
    has_visible_children: bool
    cells: List[CellResponse]


class FooterCell(CamelModel):
    month: date
    net_worth: float
    growth: Optional[float]
    growth_percent: Optional[float]
    intensity: float
    tone: str  # positive, negative, neutral


class ProjectionResponse(CamelModel):
    months: List[date]
    rows: List[ProjectionRow]
    footer: List[FooterCell]


class PagedMonthResponse(CamelModel):
    month: date
    applied: int = 0
    depreciation_failed: bool = False


class RemovedMonthResponse(CamelModel):
    month: date
    deleted: int
    unpinned: bool


class HistoryPoint(CamelModel):
    date: str
    value: float


class AllocationSlice(CamelModel):
    name: str
    value: float


class SummaryResponse(CamelModel):
    net_worth: float
    net_worth_history: List[HistoryPoint]
    asset_allocation: List[AllocationSlice]
