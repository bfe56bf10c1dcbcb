from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import sqlalchemy as sa
import structlog
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from db.models import Example
from db.settings import SETTINGS, sync_database_url


def _stderr_logger() -> structlog.typing.FilteringBoundLogger:
    # stdout carries only the JSON summary, so `example-seed | jq` works.
    return structlog.wrap_logger(structlog.PrintLogger(sys.stderr))


@dataclass(frozen=True)
class ExampleSpec:
    name: str
    email: str


EXAMPLE_DATA: list[ExampleSpec] = [
    ExampleSpec(name="Alice", email="alice@prisma.io"),
    ExampleSpec(name="Bob", email="bob@prisma.io"),
]


def seed_examples(engine: sa.Engine, examples: Sequence[ExampleSpec] = EXAMPLE_DATA) -> int:
    """
    Insert each example in order, one transaction per row.

    There is no retry and no compensation: the first failure propagates and
    rows committed before it stay committed.
    """
    logger = _stderr_logger()
    created = 0
    for spec in examples:
        with Session(engine) as session, session.begin():
            session.add(Example(name=spec.name, email=spec.email))
        created += 1
        logger.info("example_created", name=spec.name, email=spec.email)
    return created


def count_examples(engine: sa.Engine) -> int:
    with engine.connect() as conn:
        return conn.execute(sa.select(sa.func.count()).select_from(Example)).scalar_one()


def seed(database_url: str, examples: Sequence[ExampleSpec] = EXAMPLE_DATA) -> dict:
    engine = sa.create_engine(sync_database_url(database_url), poolclass=NullPool)
    try:
        created = seed_examples(engine, examples)
        counts = {"examples": count_examples(engine)}
    finally:
        engine.dispose()

    summary = {"created": created, "counts": counts}
    print(json.dumps(summary, indent=2, default=str))
    return summary


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Insert the fixed example rows.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    args = parser.parse_args(argv)
    seed(args.database_url)


if __name__ == "__main__":
    main()
