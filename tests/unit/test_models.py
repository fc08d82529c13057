"""Tests for snapshot and feed models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ccfeed.models.feed import Activity, LastBuildStatus, Project, format_build_time
from ccfeed.models.pipeline import PipelineSnapshot, StageExecutionStatus, StageSnapshot


def test_format_build_time_uses_z_for_utc():
    value = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert format_build_time(value) == "2024-01-01T00:00:00Z"


def test_format_build_time_drops_microseconds():
    value = datetime(2024, 3, 5, 10, 20, 30, 999999, tzinfo=timezone.utc)
    assert format_build_time(value) == "2024-03-05T10:20:30Z"


def test_format_build_time_keeps_offset():
    value = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_build_time(value) == "2024-01-01T12:00:00+02:00"


def test_naive_created_at_is_read_as_utc():
    snapshot = PipelineSnapshot(name="demo", created_at=datetime(2024, 1, 1))
    assert snapshot.created_at.tzinfo is timezone.utc


def test_pipeline_name_is_required():
    with pytest.raises(ValidationError):
        PipelineSnapshot(created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))


def test_snapshots_are_immutable():
    stage = StageSnapshot(stage_name="build")
    with pytest.raises(ValidationError):
        stage.stage_name = "deploy"


def test_unknown_source_status_is_kept():
    stage = StageSnapshot(stage_name="build", latest_execution_status="Superseded")
    assert stage.latest_execution_status == "Superseded"
    assert StageSnapshot(latest_execution_status="Failed").latest_execution_status == StageExecutionStatus.FAILED


def test_project_defaults():
    project = Project(name="demo", last_build_time=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert project.last_build_status is LastBuildStatus.UNKNOWN
    assert project.activity is Activity.SLEEPING
    assert project.last_build_time_text == "2024-01-01T00:00:00Z"
