"""
Database engine and session management.

The engine URL comes from the environment. Test runs get an in-memory SQLite
database unless ``DEPTRACK_TEST_DB`` names another one. SQLite connections
enforce foreign keys so dependency rows cannot outlive their targets.
"""
import os
import sys
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deptrack.utils.settings import sql_echo_enabled

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"
POSTGRES_ENV_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def _get_database_url() -> str:
    """``DATABASE_URL`` if set, else a postgres URL from the ``POSTGRES_*`` variables."""
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    values = {name: os.getenv(name) for name in POSTGRES_ENV_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        "postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}"
        "@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}".format(**values)
    )


def _is_pytest_runtime() -> bool:
    # pytest is already in sys.modules while it collects test modules
    return (
        os.getenv("PYTEST_RUNNING") == "1"
        or "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


def _sqlite_memory_kwargs() -> dict:
    # StaticPool keeps the single in-memory database alive across connections
    return {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }


explicit_test_db = os.getenv("DEPTRACK_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif _is_pytest_runtime():
    DATABASE_URL = SQLITE_MEMORY_URL
    _engine_kwargs = _sqlite_memory_kwargs()
else:
    DATABASE_URL = _get_database_url()
    _engine_kwargs = {}


def _create_engine_with_fallback(url: str, kwargs: dict):
    """Create engine; under pytest without an explicit DB, fall back to in-memory sqlite."""
    try:
        return create_engine(url, echo=sql_echo_enabled(), **kwargs)
    except OperationalError:
        if _is_pytest_runtime() and not os.getenv("DEPTRACK_TEST_DB"):
            return create_engine(SQLITE_MEMORY_URL, echo=sql_echo_enabled(), **_sqlite_memory_kwargs())
        raise


def _enable_sqlite_foreign_keys(target_engine) -> None:
    """Turn on SQLite foreign key enforcement for every new DBAPI connection."""
    if target_engine.url.get_backend_name() != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


engine = _create_engine_with_fallback(DATABASE_URL, _engine_kwargs)
# Must precede the first connection, which StaticPool then reuses
_enable_sqlite_foreign_keys(engine)

if engine.url.get_backend_name() == "sqlite" and engine.url.database in (None, "", ":memory:"):
    from deptrack.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope():
    """Provide a session whose work is committed on success and rolled back on error.

    Repository writes commit on their own; use this to bracket a sequence of
    calls and guarantee the session is closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
