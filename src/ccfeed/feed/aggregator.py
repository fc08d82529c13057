"""Reduce pipeline snapshots to feed projects.

Two granularities are supported and must be chosen per deployment, since a
dashboard built against one will misread the other:

* ``Granularity.PIPELINE``: one project per pipeline. Any failed stage fails
  the whole pipeline, any running stage makes it ``Building`` and the build
  time is the most recent stage time.
* ``Granularity.STAGE``: one project per stage, named
  ``"<pipeline> :: <stage>"``, with no cross-stage reduction.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from ccfeed.core.exceptions import AggregationPreconditionError
from ccfeed.models.feed import Activity, Granularity, LastBuildStatus, Project
from ccfeed.models.pipeline import PipelineSnapshot, StageExecutionStatus, StageSnapshot

STAGE_NAME_SEPARATOR = " :: "


def stage_status(stage: StageSnapshot) -> LastBuildStatus:
    """Derive the last build status of a single stage."""
    status = stage.latest_execution_status
    if status is None:
        return LastBuildStatus.UNKNOWN
    if status == StageExecutionStatus.FAILED:
        return LastBuildStatus.FAILURE
    if status == StageExecutionStatus.SUCCEEDED:
        return LastBuildStatus.SUCCESS
    # InProgress, Stopped, Cancelled and anything else: the previous terminal
    # outcome is not available from a single state read, so report Success.
    # This under-reports failures while a re-run is in flight.
    return LastBuildStatus.SUCCESS


def stage_activity(stage: StageSnapshot) -> Activity:
    if stage.latest_execution_status == StageExecutionStatus.IN_PROGRESS:
        return Activity.BUILDING
    return Activity.SLEEPING


def stage_time(created_at: datetime, stage: StageSnapshot) -> datetime:
    """Timestamp of the stage's first action, else the pipeline creation time.

    Actions keep the source order; only the first one is consulted.
    """
    if stage.actions and stage.actions[0].last_status_change is not None:
        return stage.actions[0].last_status_change
    return created_at


def stage_project_name(pipeline: PipelineSnapshot, stage: StageSnapshot) -> str:
    if not stage.stage_name:
        raise AggregationPreconditionError(
            f"pipeline {pipeline.name!r} has a stage without a name"
        )
    return f"{pipeline.name}{STAGE_NAME_SEPARATOR}{stage.stage_name}"


class FeedAggregator:
    """Map snapshots to projects for a fixed granularity."""

    def __init__(self, granularity: Granularity | str = Granularity.STAGE) -> None:
        self._granularity = Granularity(granularity)

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    def aggregate(self, snapshots: Iterable[PipelineSnapshot]) -> list[Project]:
        """Return projects in input order (pipelines, then their stages)."""
        projects: list[Project] = []
        for pipeline in snapshots:
            if self._granularity is Granularity.PIPELINE:
                projects.append(self.pipeline_project(pipeline))
            else:
                projects.extend(self.stage_projects(pipeline))
        return projects

    @staticmethod
    def pipeline_project(pipeline: PipelineSnapshot) -> Project:
        # Worst-case reduction: only Failure stages fail the pipeline, so a
        # pipeline whose stages never ran still reports Success.
        last_build_status = LastBuildStatus.SUCCESS
        activity = Activity.SLEEPING
        last_build_time = pipeline.created_at

        for stage in pipeline.stages:
            if stage_status(stage) is LastBuildStatus.FAILURE:
                last_build_status = LastBuildStatus.FAILURE
            if stage_activity(stage) is Activity.BUILDING:
                activity = Activity.BUILDING
            last_build_time = max(last_build_time, stage_time(pipeline.created_at, stage))

        return Project(
            name=pipeline.name,
            last_build_status=last_build_status,
            activity=activity,
            last_build_time=last_build_time,
        )

    @staticmethod
    def stage_projects(pipeline: PipelineSnapshot) -> list[Project]:
        return [
            Project(
                name=stage_project_name(pipeline, stage),
                last_build_status=stage_status(stage),
                activity=stage_activity(stage),
                last_build_time=stage_time(pipeline.created_at, stage),
            )
            for stage in pipeline.stages
        ]


def aggregate(
    snapshots: Sequence[PipelineSnapshot],
    granularity: Granularity | str = Granularity.STAGE,
) -> list[Project]:
    """Convenience wrapper around :class:`FeedAggregator`."""
    return FeedAggregator(granularity).aggregate(snapshots)
