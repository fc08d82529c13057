"""Pipeline state sources behind the IPipelineStateSource protocol."""

from __future__ import annotations

from ccfeed.core.config import AppSettings
from ccfeed.core.protocols import IPipelineStateSource
from ccfeed.sources.codepipeline_backend import CodePipelineStateSource


def create_state_source(settings: AppSettings | None = None) -> IPipelineStateSource:
    if settings is None:
        settings = AppSettings()
    return CodePipelineStateSource(
        region=settings.codepipeline.region,
        endpoint_url=settings.codepipeline.endpoint_url,
        timeout=settings.codepipeline.timeout,
    )
