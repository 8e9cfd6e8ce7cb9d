"""Asset ownership and loading helpers"""
from typing import List

from sqlalchemy.orm import Session, selectinload

from fintrack.database.models import AssetGroup, AssetItem
from fintrack.services.errors import AssetForbiddenError, AssetNotFoundError


class AssetService:
    """Ownership checks shared by every asset route."""

    @staticmethod
    def get_owned_group(db: Session, user_id: int, group_id: int) -> AssetGroup:
        group = db.query(AssetGroup).filter(AssetGroup.id == group_id).first()
        if not group:
            raise AssetNotFoundError()
        if group.user_id != user_id:
            raise AssetForbiddenError()
        return group

    @staticmethod
    def get_owned_item(db: Session, user_id: int, item_id: int) -> AssetItem:
        """Return the item if its group belongs to the user."""
        item = db.query(AssetItem).filter(AssetItem.id == item_id).first()
        if not item:
            raise AssetNotFoundError()
        if item.group is None or item.group.user_id != user_id:
            raise AssetForbiddenError()
        return item

    @staticmethod
    def load_groups(db: Session, user_id: int) -> List[AssetGroup]:
        """Full group -> item -> valuation tree of one user, in a single round of queries."""
        return (
            db.query(AssetGroup)
            .options(selectinload(AssetGroup.items).selectinload(AssetItem.valuations))
            .filter(AssetGroup.user_id == user_id)
            .order_by(AssetGroup.id)
            .all()
        )
