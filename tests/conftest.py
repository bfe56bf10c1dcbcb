from __future__ import annotations

import os
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.config import Config
from sqlalchemy.pool import NullPool


# The API settings are instantiated at import time and require DATABASE_URL.
# Tests swap the session per test, so this URL only has to be a valid async one.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["TRACING_ENABLED"] = "false"

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    # Runtime-style (async) URL; the seeder and Alembic map it onto pysqlite.
    return f"sqlite+aiosqlite:///{tmp_path / 'example.db'}"


@pytest.fixture()
def migrated_db(database_url: str, monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("DATABASE_URL", database_url)
    cfg = Config(str(REPO_ROOT / "db" / "migrations" / "alembic.ini"))
    command.upgrade(cfg, "head")
    return database_url


@pytest.fixture()
def sync_engine(migrated_db: str):
    from db.settings import sync_database_url

    engine = sa.create_engine(sync_database_url(migrated_db), poolclass=NullPool)
    yield engine
    engine.dispose()
