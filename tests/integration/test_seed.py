from __future__ import annotations

import json

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError


def _rows(engine: sa.Engine) -> list[tuple[str, str]]:
    with engine.connect() as conn:
        return [tuple(r) for r in conn.execute(sa.text("SELECT name, email FROM examples ORDER BY id"))]


def test_seed_examples_inserts_alice_then_bob(sync_engine: sa.Engine) -> None:
    from db.seed import seed_examples

    assert seed_examples(sync_engine) == 2
    assert _rows(sync_engine) == [("Alice", "alice@prisma.io"), ("Bob", "bob@prisma.io")]


def test_seed_examples_database_assigns_identity(sync_engine: sa.Engine) -> None:
    from db.seed import seed_examples

    seed_examples(sync_engine)
    with sync_engine.connect() as conn:
        rows = conn.execute(sa.text("SELECT id, created_at, updated_at FROM examples ORDER BY id")).all()
    assert len(rows) == 2
    assert rows[0].id < rows[1].id
    assert all(r.created_at is not None and r.updated_at is not None for r in rows)


def test_seed_twice_fails_on_first_duplicate(sync_engine: sa.Engine) -> None:
    from db.seed import seed_examples

    seed_examples(sync_engine)
    with pytest.raises(IntegrityError):
        seed_examples(sync_engine)
    assert _rows(sync_engine) == [("Alice", "alice@prisma.io"), ("Bob", "bob@prisma.io")]


def test_seed_stops_at_first_failure(sync_engine: sa.Engine) -> None:
    from db.seed import ExampleSpec, seed_examples

    seed_examples(sync_engine)
    # Alice collides; Carol after her must never be attempted.
    with pytest.raises(IntegrityError):
        seed_examples(sync_engine, [ExampleSpec("Alice", "alice@prisma.io"), ExampleSpec("Carol", "carol@prisma.io")])
    assert ("Carol", "carol@prisma.io") not in _rows(sync_engine)


def test_seed_failure_keeps_earlier_rows(sync_engine: sa.Engine) -> None:
    from db.seed import ExampleSpec, seed_examples

    seed_examples(sync_engine)
    with pytest.raises(IntegrityError):
        seed_examples(sync_engine, [ExampleSpec("Carol", "carol@prisma.io"), ExampleSpec("Bob", "bob@prisma.io")])
    assert _rows(sync_engine)[-1] == ("Carol", "carol@prisma.io")
    assert len(_rows(sync_engine)) == 3


def test_seed_prints_summary(migrated_db: str, capsys: pytest.CaptureFixture[str]) -> None:
    from db.seed import seed

    summary = seed(migrated_db)
    assert summary == {"created": 2, "counts": {"examples": 2}}
    assert json.loads(capsys.readouterr().out) == summary


def test_main_accepts_database_url_flag(migrated_db: str, sync_engine: sa.Engine, capsys: pytest.CaptureFixture[str]) -> None:
    from db.seed import main

    main(["--database-url", migrated_db])
    assert len(_rows(sync_engine)) == 2
    captured = capsys.readouterr()
    # stdout is exactly the JSON summary; per-row events go to stderr.
    assert json.loads(captured.out) == {"created": 2, "counts": {"examples": 2}}
    assert "example_created" in captured.err


def test_main_runs_without_arguments(migrated_db: str, sync_engine: sa.Engine) -> None:
    from db.seed import main

    # migrated_db exported DATABASE_URL for this test.
    main([])
    assert len(_rows(sync_engine)) == 2


def test_seed_against_missing_table_raises(tmp_path) -> None:
    from db.seed import seed

    with pytest.raises(sa.exc.OperationalError):
        seed(f"sqlite:///{tmp_path / 'empty.db'}")
