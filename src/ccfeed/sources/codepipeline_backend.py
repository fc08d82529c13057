"""AWS CodePipeline state source implementing IPipelineStateSource."""

from __future__ import annotations

import logging
from typing import Any, Callable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ccfeed.core.exceptions import FetchError
from ccfeed.models.pipeline import ActionSnapshot, PipelineSnapshot, StageSnapshot

logger = logging.getLogger(__name__)


def _stage_snapshot(stage_state: dict[str, Any]) -> StageSnapshot:
    latest = stage_state.get("latestExecution") or {}
    actions = tuple(
        ActionSnapshot(
            action_name=action.get("actionName"),
            last_status_change=(action.get("latestExecution") or {}).get("lastStatusChange"),
        )
        for action in stage_state.get("actionStates") or []
    )
    return StageSnapshot(
        stage_name=stage_state.get("stageName"),
        latest_execution_status=latest.get("status"),
        actions=actions,
    )


class CodePipelineStateSource:
    """Production IPipelineStateSource backed by the CodePipeline API.

    Every request is a single attempt bounded by ``timeout``, and the cycle
    budget passed as ``remaining`` is checked before each request, so one
    fetch cannot outlive the publisher's deadline by more than one request.
    """

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None,
                 timeout: float = 10.0) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {
            "region_name": region,
            "config": Config(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"total_max_attempts": 1},
            ),
        }
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("codepipeline", **kwargs)

    @staticmethod
    def _check_budget(remaining: Callable[[], float] | None, done: int, total: int | None) -> None:
        if remaining is not None and remaining() <= 0:
            of_total = f" of {total}" if total is not None else ""
            raise FetchError(f"cycle deadline reached after {done}{of_total} pipeline states")

    def _list_pipelines(self, remaining: Callable[[], float] | None) -> list[dict[str, Any]]:
        summaries: list[dict[str, Any]] = []
        paginator = self._client.get_paginator("list_pipelines")
        for page in paginator.paginate():
            summaries.extend(page.get("pipelines", []))
            self._check_budget(remaining, 0, None)
        return summaries

    def fetch_pipeline_states(
        self, remaining: Callable[[], float] | None = None
    ) -> list[PipelineSnapshot]:
        self._check_budget(remaining, 0, None)
        try:
            summaries = self._list_pipelines(remaining)
            snapshots: list[PipelineSnapshot] = []
            for summary in summaries:
                self._check_budget(remaining, len(snapshots), len(summaries))
                state = self._client.get_pipeline_state(name=summary["name"])
                snapshots.append(
                    PipelineSnapshot(
                        name=summary["name"],
                        created_at=summary["created"],
                        region=self._region,
                        stages=tuple(_stage_snapshot(s) for s in state.get("stageStates", [])),
                    )
                )
        except (ClientError, BotoCoreError) as exc:
            raise FetchError(f"unable to get pipeline state in {self._region}: {exc}") from exc
        logger.debug("Fetched state for %d pipelines in %s", len(snapshots), self._region)
        return snapshots
