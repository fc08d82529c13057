"""Publish cycle state models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel

from ccfeed.models.feed import Granularity


class CycleStage(StrEnum):
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class CycleReport(BaseModel):
    """Outcome of one fetch -> aggregate -> persist pass."""

    stage: CycleStage = CycleStage.FETCHING
    granularity: Granularity
    target: str = ""
    pipeline_count: int = 0
    project_count: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration_ms: Optional[int] = None
