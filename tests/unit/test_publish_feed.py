"""Tests for the publish_feed CLI script."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

import publish_feed  # noqa: E402

from ccfeed.core.config import AppSettings  # noqa: E402
from ccfeed.models.pipeline import PipelineSnapshot, StageSnapshot  # noqa: E402
from tests.fakes import MemoryStateSource  # noqa: E402

SNAPSHOT = PipelineSnapshot(
    name="demo",
    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    stages=(
        StageSnapshot(stage_name="build", latest_execution_status="Succeeded"),
        StageSnapshot(stage_name="deploy", latest_execution_status="Failed"),
    ),
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BUCKET", "KEY", "CCFEED_S3_BUCKET", "CCFEED_S3_KEY", "CCFEED_BACKEND",
                 "CCFEED_FILE_PATH", "CCFEED_GRANULARITY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source(monkeypatch):
    fake = MemoryStateSource([SNAPSHOT])
    monkeypatch.setattr("ccfeed.handler.create_state_source", lambda settings: fake)
    return fake


class TestApplyOverrides:
    def test_output_implies_file_backend(self):
        args = publish_feed.parse_args(["--output", "cc.xml"])
        settings = publish_feed.apply_overrides(AppSettings(), args)
        assert settings.backend == "file"
        assert settings.file.path == "cc.xml"

    def test_s3_target_and_region(self):
        args = publish_feed.parse_args(["--bucket", "b", "--key", "k.xml", "--region", "eu-west-1"])
        settings = publish_feed.apply_overrides(AppSettings(), args)
        assert settings.backend == "s3"
        assert settings.target == "s3://b/k.xml"
        assert settings.s3.region == "eu-west-1"
        assert settings.codepipeline.region == "eu-west-1"


class TestMain:
    def test_writes_per_pipeline_feed(self, source, tmp_path, capsys):
        out = tmp_path / "cc.xml"
        code = publish_feed.main(["--output", str(out), "--granularity", "pipeline"])

        assert code == 0
        assert b'name="demo" activity="Sleeping" lastBuildStatus="Failure"' in out.read_bytes()
        assert "Published 1 projects from 1 pipelines" in capsys.readouterr().out

    def test_failure_returns_non_zero(self, source, tmp_path, capsys):
        source.fail_with(RuntimeError("throttled"))
        code = publish_feed.main(["--output", str(tmp_path / "cc.xml")])

        assert code == 1
        assert "throttled" in capsys.readouterr().err
