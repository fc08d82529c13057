"""S3 feed storage backend implementing IPersistenceProvider."""

from __future__ import annotations

import logging
from typing import Sequence

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ccfeed.core.exceptions import PersistError
from ccfeed.feed.encoder import CONTENT_TYPE, encode_projects
from ccfeed.models.feed import Project

logger = logging.getLogger(__name__)


class S3FeedStore:
    """Publish the feed as a single S3 object.

    The document is encoded in memory first and sent with one ``PutObject``,
    so the key either keeps its previous version or holds the complete new
    one. Retries are disabled; the caller decides whether to run again.
    """

    def __init__(self, bucket: str, key: str, region: str = "us-east-1",
                 endpoint_url: str | None = None, timeout: float = 15.0,
                 acl: str = "public-read") -> None:
        self._bucket = bucket
        self._key = key
        self._region = region
        self._endpoint_url = endpoint_url
        self._acl = acl
        self._timeout = timeout
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
        self._client = boto3.client("s3", **kwargs)

    @property
    def target(self) -> str:
        return f"s3://{self._bucket}/{self._key}"

    @property
    def timeout(self) -> float:
        """Upper bound on one publish; the publisher reserves this much budget."""
        return self._timeout

    def persist_projects(self, projects: Sequence[Project]) -> None:
        body = encode_projects(projects)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=self._key,
                Body=body,
                ACL=self._acl,
                ContentType=CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as exc:
            raise PersistError(self.target, str(exc)) from exc
        logger.info("Published %d projects (%d bytes) to %s", len(projects), len(body), self.target)
