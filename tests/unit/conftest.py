import pytest

from deptrack.db.database import SessionLocal, engine
from deptrack.db import models, schemas
from deptrack.db.repositories import libraries as repo_libraries


@pytest.fixture(scope="module")
def db():
    models.Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean(request):
    if "db" not in request.fixturenames:
        yield
        return
    db = request.getfixturevalue("db")
    for table in reversed(models.Base.metadata.sorted_tables):
        db.execute(table.delete())
    db.commit()
    # Integer ids restart after the wipe; drop stale instances from the identity map
    db.expunge_all()
    yield


@pytest.fixture
def catalog(db):
    """Two vendors, three libraries and their versions.

    apache: commons-lang (2.6, 3.12), log4j (2.14, 2.17)
    google: guava (31.0)
    """
    apache = repo_libraries.add_library_vendor(db, schemas.LibraryVendorCreate(vendor="apache"))
    google = repo_libraries.add_library_vendor(db, schemas.LibraryVendorCreate(vendor="google"))
    commons = repo_libraries.add_library(db, apache.id, schemas.LibraryCreate(library_name="commons-lang", language="java"))
    log4j = repo_libraries.add_library(db, apache.id, schemas.LibraryCreate(library_name="log4j", language="java", license="Apache-2.0"))
    guava = repo_libraries.add_library(db, google.id, schemas.LibraryCreate(library_name="guava", language="java"))
    return {
        "apache": apache,
        "google": google,
        "commons": commons,
        "log4j": log4j,
        "guava": guava,
        "commons-2.6": repo_libraries.add_library_version(db, commons.id, "2.6"),
        "commons-3.12": repo_libraries.add_library_version(db, commons.id, "3.12"),
        "log4j-2.14": repo_libraries.add_library_version(db, log4j.id, "2.14"),
        "log4j-2.17": repo_libraries.add_library_version(db, log4j.id, "2.17"),
        "guava-31.0": repo_libraries.add_library_version(db, guava.id, "31.0"),
    }
