from __future__ import annotations

import sqlalchemy as sa
from fastapi import Depends, FastAPI, Header, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from db.seed import seed as seed_db
from services.api.app import observability
from services.api.app.db import ENGINE, get_session
from services.api.app.logging import configure_logging, logger
from services.api.app.persistence import list_examples, session_database_url
from services.api.app.schemas import ExampleOut, SeedSummary
from services.api.app.settings import SETTINGS


app = FastAPI(title="Example API", version="0.1.0")
configure_logging(SETTINGS.log_level)
if SETTINGS.tracing_enabled:
    observability.setup_tracing(app, service_name="api")
    observability.instrument_sqlalchemy(ENGINE)
observability.add_metrics_middleware(app, service_name="api")


@app.get("/healthz")
async def healthz(session: AsyncSession = Depends(get_session)) -> dict:
    await session.execute(sa.text("SELECT 1"))
    return {"ok": True}


@app.get("/api/example", response_model=list[ExampleOut])
async def list_example(session: AsyncSession = Depends(get_session)) -> list[ExampleOut]:
    # Query string, headers and body are ignored.
    rows = await list_examples(session)
    observability.EXAMPLES_LISTED.observe(len(rows))
    logger.info("examples_listed", count=len(rows))
    return [ExampleOut.model_validate(r) for r in rows]


def _require_admin(x_admin_token: str | None) -> None:
    if not x_admin_token or x_admin_token != SETTINGS.admin_token:
        raise HTTPException(status_code=403, detail="forbidden")


@app.post("/admin/seed", response_model=SeedSummary)
async def admin_seed(
    x_admin_token: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """
    Run the seeder against the database the request session is bound to (dev only).

    Rows are inserted one transaction at a time, so a 409 does not mean nothing was
    written: if Alice is new but Bob already exists, Alice stays inserted. List the
    examples afterwards to see the resulting table.
    """
    _require_admin(x_admin_token)
    try:
        summary = await run_in_threadpool(seed_db, session_database_url(session))
    except IntegrityError:
        logger.info("admin_seed_conflict")
        raise HTTPException(status_code=409, detail="examples already seeded")
    observability.EXAMPLES_SEEDED_TOTAL.inc(summary["created"])
    logger.info("admin_seed", created=summary["created"], examples=summary["counts"]["examples"])
    return summary
