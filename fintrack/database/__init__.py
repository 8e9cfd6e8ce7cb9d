"""Database module"""
from fintrack.database.config import Base, get_db, init_db, SessionLocal, get_engine
from fintrack.database.models import User, AssetGroup, AssetItem, AssetValuation, PinnedMonth

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "SessionLocal",
    "get_engine",
    "User",
    "AssetGroup",
    "AssetItem",
    "AssetValuation",
    "PinnedMonth",
]
