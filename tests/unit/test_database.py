"""
Tests for engine configuration and the session helpers in database.py.
"""

import os
import sys
from unittest.mock import patch, Mock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

import deptrack.db.database as dbmod
from deptrack.db import models


POSTGRES_VARS = ["POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB"]


class TestDatabaseUrl:

    def test_database_url_wins(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/deps")
        assert dbmod._get_database_url() == "postgresql://u:p@db:5432/deps"

    def test_built_from_components(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        for var, value in zip(POSTGRES_VARS, ["dt", "secret", "pg", "5433", "deptrack"]):
            monkeypatch.setenv(var, value)
        assert dbmod._get_database_url() == "postgresql://dt:secret@pg:5433/deptrack"

    def test_missing_components_raise(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        for var in POSTGRES_VARS:
            monkeypatch.delenv(var, raising=False)
        monkeypatch.setenv("POSTGRES_USER", "dt")
        with pytest.raises(ValueError) as exc:
            dbmod._get_database_url()
        assert "POSTGRES_PASSWORD" in str(exc.value)
        assert "POSTGRES_USER" not in str(exc.value)


class TestRuntimeDetection:

    def test_explicit_env(self):
        with patch.dict(os.environ, {"PYTEST_RUNNING": "1"}):
            assert dbmod._is_pytest_runtime() is True

    def test_current_test_env(self):
        with patch.dict(os.environ, {"PYTEST_CURRENT_TEST": "some_test"}):
            assert dbmod._is_pytest_runtime() is True

    def test_sys_modules(self):
        assert dbmod._is_pytest_runtime() is True

    def test_not_detected(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "pytest")
        with patch.dict(os.environ, {}, clear=True):
            assert dbmod._is_pytest_runtime() is False


class TestEngineCreation:

    def test_engine_is_in_memory_sqlite_under_pytest(self):
        assert dbmod.DATABASE_URL == dbmod.SQLITE_MEMORY_URL
        assert dbmod.engine.url.get_backend_name() == "sqlite"

    def test_fallback_to_sqlite_on_operational_error(self):
        fallback = Mock()
        with patch("deptrack.db.database.create_engine", side_effect=[OperationalError("connect", {}, Exception("down")), fallback]) as mock_create:
            result = dbmod._create_engine_with_fallback("postgresql://nowhere/db", {})
        assert result is fallback
        assert mock_create.call_args_list[1].args[0] == dbmod.SQLITE_MEMORY_URL

    def test_no_fallback_with_explicit_test_db(self, monkeypatch):
        monkeypatch.setenv("DEPTRACK_TEST_DB", "postgresql://explicit/db")
        with patch("deptrack.db.database.create_engine", side_effect=OperationalError("connect", {}, Exception("down"))):
            with pytest.raises(OperationalError):
                dbmod._create_engine_with_fallback("postgresql://explicit/db", {})

    def test_sqlite_engines_get_foreign_key_pragma(self):
        fresh = create_engine(dbmod.SQLITE_MEMORY_URL, **dbmod._sqlite_memory_kwargs())
        dbmod._enable_sqlite_foreign_keys(fresh)
        try:
            with fresh.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            fresh.dispose()


class TestSessions:

    @pytest.fixture(autouse=True)
    def _schema(self):
        models.Base.metadata.create_all(bind=dbmod.engine)
        yield
        with dbmod.engine.begin() as conn:
            for table in reversed(models.Base.metadata.sorted_tables):
                conn.execute(table.delete())

    def test_foreign_keys_enforced_on_module_engine(self):
        with dbmod.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_session_scope_closes_session(self):
        session = Mock()
        with patch.object(dbmod, "SessionLocal", return_value=session):
            with dbmod.session_scope() as db:
                assert db is session
        session.commit.assert_called_once()
        session.close.assert_called_once()
        session.rollback.assert_not_called()

    def test_session_scope_commits(self):
        with dbmod.session_scope() as db:
            db.add(models.Application(name="scoped"))
        with dbmod.session_scope() as db:
            assert [a.name for a in db.query(models.Application).all()] == ["scoped"]

    def test_session_scope_rolls_back_and_reraises(self):
        with pytest.raises(RuntimeError):
            with dbmod.session_scope() as db:
                db.add(models.Application(name="discarded"))
                db.flush()
                raise RuntimeError("caller failure")
        with dbmod.session_scope() as db:
            assert db.query(models.Application).count() == 0
