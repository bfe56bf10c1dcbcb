from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Example


async def list_examples(session: AsyncSession) -> Sequence[Example]:
    # Full table, database order: no filter, no sort, no paging.
    return (await session.execute(sa.select(Example))).scalars().all()


def session_database_url(session: AsyncSession) -> str:
    return session.bind.url.render_as_string(hide_password=False)
