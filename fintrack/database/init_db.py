"""Database initialisation script
Creates the tables and, when ALLOW_DEMO_SEED is set and the database holds no
users yet, a demo user with a small asset tree. Existing data is never touched.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from fintrack.config import ALLOW_DEMO_SEED, LOG_LEVEL
from fintrack.database.config import SessionLocal, init_db
from fintrack.database.models import AssetGroup, AssetItem, AssetValuation, User
from fintrack.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@fintrack.local"

# group -> [(item, depreciation, {month: value}, [children...])]
DEMO_TREE = {
    "Liquidity": [
        ("Checking account", None, {date(2026, 8, 1): 4200.0, date(2026, 9, 1): 4650.0}, []),
        ("Savings", None, {}, [
            ("Emergency fund", None, {date(2026, 8, 1): 10000.0, date(2026, 9, 1): 10000.0}, []),
            ("Holiday pot", None, {date(2026, 8, 1): 800.0, date(2026, 9, 1): 950.0}, []),
        ]),
    ],
    "Vehicles": [
        ("Car", 150.0, {date(2026, 8, 1): 14300.0, date(2026, 9, 1): 14150.0}, []),
    ],
}


def _add_items(db: Session, group: AssetGroup, specs, parent=None) -> int:
    count = 0
    for name, depreciation, values, children in specs:
        item = AssetItem(
            group_id=group.id,
            parent_item_id=parent.id if parent else None,
            name=name,
            depreciation_amount=depreciation,
        )
        db.add(item)
        db.flush()
        for month, value in values.items():
            db.add(AssetValuation(item_id=item.id, month=month, value=value))
        count += 1 + _add_items(db, group, children, item)
    return count


def seed_demo_data(db: Session) -> bool:
    """Write the demo tree; returns False when the database already has users."""
    existing_users = db.query(User).count()
    if existing_users > 0:
        logger.info("[Seed] %s users already present, skipping demo data", existing_users)
        return False

    user = User(email=DEMO_EMAIL)
    db.add(user)
    db.flush()

    items = 0
    for group_name, specs in DEMO_TREE.items():
        group = AssetGroup(user_id=user.id, name=group_name)
        db.add(group)
        db.flush()
        items += _add_items(db, group, specs)

    db.commit()
    logger.info("[Seed] created demo user %s with %s groups and %s items", DEMO_EMAIL, len(DEMO_TREE), items)
    return True


def main():
    configure_logging(LOG_LEVEL)
    init_db()
    if not ALLOW_DEMO_SEED:
        logger.info("[Seed] tables ready; set ALLOW_DEMO_SEED=true to write demo data")
        return

    db = SessionLocal()
    try:
        if seed_demo_data(db):
            from fintrack.api.deps import create_access_token

            user = db.query(User).filter(User.email == DEMO_EMAIL).first()
            print(f"Bearer token for {DEMO_EMAIL}: {create_access_token(user.id)}")
    except Exception:
        db.rollback()
        logger.exception("[Seed] failed to write demo data")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
