"""Pipeline, stage and action snapshots as read from the state source."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class StageExecutionStatus(StrEnum):
    """Stage execution statuses reported by CodePipeline."""

    CANCELLED = "Cancelled"
    IN_PROGRESS = "InProgress"
    FAILED = "Failed"
    STOPPED = "Stopped"
    STOPPING = "Stopping"
    SUCCEEDED = "Succeeded"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ActionSnapshot(BaseModel):
    """Latest observed execution of a single action within a stage."""

    model_config = ConfigDict(frozen=True)

    action_name: Optional[str] = None
    last_status_change: Optional[datetime] = None

    @field_validator("last_status_change")
    @classmethod
    def default_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class StageSnapshot(BaseModel):
    """Latest observed execution of a stage.

    ``latest_execution_status`` is ``None`` when the stage has never run; any
    string the source reports is kept as-is, known values compare equal to
    :class:`StageExecutionStatus` members.
    """

    model_config = ConfigDict(frozen=True)

    stage_name: Optional[str] = None
    latest_execution_status: Optional[str] = None
    actions: tuple[ActionSnapshot, ...] = ()


class PipelineSnapshot(BaseModel):
    """One pipeline's state at fetch time."""

    model_config = ConfigDict(frozen=True)

    name: str
    created_at: datetime  # naive values are read as UTC
    region: Optional[str] = None
    stages: tuple[StageSnapshot, ...] = ()

    @field_validator("created_at")
    @classmethod
    def default_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)
