"""Integration test fixtures: LocalStack S3 and CodePipeline."""

from __future__ import annotations

import os

import boto3
import pytest

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REGION = "us-east-1"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)
        client.list_buckets()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack."""
    return boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)


@pytest.fixture
def feed_bucket(localstack_s3):
    """A fresh bucket for one test, emptied and removed afterwards."""
    name = "ccfeed-inttest"
    localstack_s3.create_bucket(Bucket=name)
    yield name
    for obj in localstack_s3.list_objects_v2(Bucket=name).get("Contents", []):
        localstack_s3.delete_object(Bucket=name, Key=obj["Key"])
    localstack_s3.delete_bucket(Bucket=name)
