"""Pluggable feed persistence backends behind Protocol interfaces."""

from __future__ import annotations

from ccfeed.core.config import AppSettings
from ccfeed.core.protocols import IPersistenceProvider
from ccfeed.persistence.file_backend import FileFeedStore
from ccfeed.persistence.s3_backend import S3FeedStore


def create_persistence(settings: AppSettings | None = None) -> IPersistenceProvider:
    """Create the feed store selected by ``settings.backend``."""
    if settings is None:
        settings = AppSettings()
    settings.require_target()

    if settings.backend == "file":
        return FileFeedStore(path=settings.file.path, mode=settings.file.mode)

    return S3FeedStore(
        bucket=settings.s3.bucket,
        key=settings.s3.key,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
        timeout=settings.s3.timeout,
        acl=settings.s3.acl,
    )
