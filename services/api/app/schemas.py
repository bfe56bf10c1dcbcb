from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ExampleOut(StrictModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class SeedCounts(StrictModel):
    examples: int


class SeedSummary(StrictModel):
    created: int
    counts: SeedCounts
