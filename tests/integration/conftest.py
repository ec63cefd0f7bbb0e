import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from deptrack.db import models


# Session-wide Postgres test container, opt-in because it needs Docker
@pytest.fixture(scope="session")
def _test_postgres():
    if os.getenv("DEPTRACK_INTEGRATION") != "1":
        pytest.skip("set DEPTRACK_INTEGRATION=1 to run Postgres integration tests")
    from testcontainers.postgres import PostgresContainer

    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image) as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def _engine(_test_postgres):
    engine = create_engine(_test_postgres, future=True)
    models.Base.metadata.create_all(bind=engine)
    yield engine
    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def pg_session(_engine):
    SessionLocal = sessionmaker(bind=_engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with _engine.begin() as conn:
            for table in reversed(models.Base.metadata.sorted_tables):
                conn.execute(table.delete())
