"""Database configuration
Builds the SQLAlchemy engine from DATABASE_URL and hands out one session per request.
"""
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from fintrack.config import BASE_DIR, DATABASE_URL

Base = declarative_base()

# Lazily initialised so importing the models never touches the database
_engine = None
_SessionLocal = None


def _init_engine():
    """Create the engine on first use."""
    global _engine
    if _engine is None:
        if DATABASE_URL.startswith("sqlite"):
            os.makedirs(BASE_DIR / "data", exist_ok=True)
            _engine = create_engine(
                DATABASE_URL,
                connect_args={"check_same_thread": False},
                echo=False,
            )
        else:
            _engine = create_engine(
                DATABASE_URL,
                echo=False,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,  # drop stale connections
                pool_recycle=1800,
            )
    return _engine


def _init_session_local():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_init_engine())
    return _SessionLocal


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Dialects whose INSERT supports ON CONFLICT (upsert / skip duplicates)
_CONFLICT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def conflict_insert(db: Session, table):
    """INSERT for the session's dialect that accepts `on_conflict_do_update` / `on_conflict_do_nothing`."""
    dialect = db.get_bind().dialect.name
    try:
        return _CONFLICT_INSERTS[dialect](table)
    except KeyError:
        raise RuntimeError(f"ON CONFLICT inserts are not supported on {dialect}") from None


def get_engine():
    return _init_engine()


def SessionLocal():
    """Open a new session outside a request (scripts, seeding)."""
    return _init_session_local()()


def get_db():
    """Yield one session per request, always closed afterwards."""
    db = _init_session_local()()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables that do not exist yet."""
    from fintrack.database import models  # noqa: F401
    Base.metadata.create_all(bind=_init_engine())
