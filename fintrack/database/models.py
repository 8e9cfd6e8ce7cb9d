"""Database models
All table definitions for the asset hierarchy (User, AssetGroup, AssetItem, AssetValuation, PinnedMonth).
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Date, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from fintrack.database.config import Base


class User(Base):
    """Owner of asset groups"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    asset_groups = relationship("AssetGroup", back_populates="user", cascade="all, delete-orphan")
    pinned_months = relationship("PinnedMonth", back_populates="user", cascade="all, delete-orphan")


class AssetGroup(Base):
    """Named container for a forest of asset items"""
    __tablename__ = "asset_groups"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="asset_groups")
    items = relationship(
        "AssetItem",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="AssetItem.id",
    )


class AssetItem(Base):
    """Node of the asset tree; only leaves carry valuations and depreciation"""
    __tablename__ = "asset_items"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("asset_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_item_id = Column(Integer, ForeignKey("asset_items.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    hidden = Column(Boolean, default=False, nullable=False)
    depreciation_amount = Column(Float, nullable=True)  # monthly decrement
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("AssetGroup", back_populates="items")
    parent = relationship("AssetItem", remote_side=[id], back_populates="children")
    children = relationship("AssetItem", back_populates="parent", cascade="all, delete-orphan")
    valuations = relationship(
        "AssetValuation",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="AssetValuation.month",
    )


class AssetValuation(Base):
    """Value of one item for one month"""
    __tablename__ = "asset_valuations"
    __table_args__ = (
        UniqueConstraint("item_id", "month", name="uniq_asset_valuation_item_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("asset_items.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Date, nullable=False, index=True)  # always the first of the month
    value = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    item = relationship("AssetItem", back_populates="valuations")


class PinnedMonth(Base):
    """Month a user paged to explicitly, kept on the projection axis even without valuations"""
    __tablename__ = "asset_pinned_months"
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uniq_asset_pinned_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="pinned_months")
