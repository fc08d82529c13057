"""Dashboard-facing feed records (CCTray vocabulary)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class LastBuildStatus(StrEnum):
    SUCCESS = "Success"
    FAILURE = "Failure"
    UNKNOWN = "Unknown"


class Activity(StrEnum):
    SLEEPING = "Sleeping"
    BUILDING = "Building"


class Granularity(StrEnum):
    """How many feed entries a pipeline produces."""

    PIPELINE = "pipeline"  # one per pipeline
    STAGE = "stage"  # one per pipeline stage


def format_build_time(value: datetime) -> str:
    """Render a timestamp as RFC 3339 at second precision.

    Naive values are read as UTC, and a zero offset is written as ``Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.replace(microsecond=0)
    if value.utcoffset() == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat()


class Project(BaseModel):
    """A single feed entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    last_build_status: LastBuildStatus = LastBuildStatus.UNKNOWN
    activity: Activity = Activity.SLEEPING
    last_build_time: datetime

    @property
    def last_build_time_text(self) -> str:
        return format_build_time(self.last_build_time)
