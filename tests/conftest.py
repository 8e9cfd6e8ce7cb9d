"""
Pytest fixtures for the FinTrack asset API.

Every test gets a fresh in-memory SQLite database shared (StaticPool) between
the test session and the request sessions of the FastAPI TestClient.
"""
from contextlib import contextmanager
from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fintrack.api.deps import create_access_token
from fintrack.database.config import Base, get_db
from fintrack.database.models import AssetGroup, AssetItem, AssetValuation, User
from fintrack.main import create_app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    app = create_app(create_tables=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Data helpers
# =============================================================================

def make_user(db: Session, email: str) -> User:
    user = User(email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_group(db: Session, user: User, name: str = "Liquidity") -> AssetGroup:
    group = AssetGroup(user_id=user.id, name=name)
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def make_item(
    db: Session,
    group: AssetGroup,
    name: str,
    parent: Optional[AssetItem] = None,
    depreciation: Optional[float] = None,
    hidden: bool = False,
) -> AssetItem:
    item = AssetItem(
        group_id=group.id,
        parent_item_id=parent.id if parent else None,
        name=name,
        depreciation_amount=depreciation,
        hidden=hidden,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def add_valuation(db: Session, item: AssetItem, month: date, value: float) -> AssetValuation:
    valuation = AssetValuation(item_id=item.id, month=month, value=value)
    db.add(valuation)
    db.commit()
    return valuation


@contextmanager
def competing_write(engine, item_id, month, value):
    """Write a row for (item, month) right before the next INSERT into asset_valuations runs,
    the way an overlapping request for the same cell would."""
    fired = []

    def before_insert(conn, cursor, statement, parameters, context, executemany):
        if fired or not statement.lstrip().upper().startswith("INSERT INTO ASSET_VALUATIONS"):
            return
        fired.append(True)
        cursor.connection.execute(
            "INSERT INTO asset_valuations (item_id, month, value) VALUES (?, ?, ?)",
            (item_id, month.isoformat(), value),
        )

    event.listen(engine, "before_cursor_execute", before_insert)
    try:
        yield fired
    finally:
        event.remove(engine, "before_cursor_execute", before_insert)


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def user(db) -> User:
    return make_user(db, "owner@fintrack.local")


@pytest.fixture
def other_user(db) -> User:
    return make_user(db, "someone-else@fintrack.local")


@pytest.fixture
def headers(user) -> dict:
    return bearer(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return bearer(other_user)
