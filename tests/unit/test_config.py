"""Tests for configuration defaults, env overrides and startup validation."""

from __future__ import annotations

import pytest

from ccfeed.core.config import AppSettings, FileConfig, S3Config, load_settings
from ccfeed.core.exceptions import ConfigurationError

TARGET_VARS = ("BUCKET", "KEY", "CCFEED_S3_BUCKET", "CCFEED_S3_KEY", "CCFEED_FILE_PATH", "CCFEED_BACKEND")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in TARGET_VARS:
        monkeypatch.delenv(name, raising=False)


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.backend == "s3"
    assert settings.granularity == "stage"
    assert settings.deadline_seconds == 25.0


def test_s3_config_defaults():
    config = S3Config()
    assert config.timeout == 15.0
    assert config.acl == "public-read"
    assert config.endpoint_url is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CCFEED_GRANULARITY", "pipeline")
    monkeypatch.setenv("CCFEED_S3_BUCKET", "dashboards")
    monkeypatch.setenv("CCFEED_S3_KEY", "cc.xml")
    monkeypatch.setenv("CCFEED_S3_TIMEOUT", "5")

    settings = load_settings()

    assert settings.granularity == "pipeline"
    assert settings.s3.bucket == "dashboards"
    assert settings.s3.timeout == 5.0
    assert settings.target == "s3://dashboards/cc.xml"


def test_legacy_bucket_and_key_names(monkeypatch):
    monkeypatch.setenv("BUCKET", "legacy-bucket")
    monkeypatch.setenv("KEY", "feeds/cctray.xml")

    settings = load_settings()

    assert settings.s3.bucket == "legacy-bucket"
    assert settings.s3.key == "feeds/cctray.xml"


def test_missing_s3_target_is_fatal(monkeypatch):
    monkeypatch.setenv("CCFEED_S3_BUCKET", "dashboards")
    with pytest.raises(ConfigurationError, match="key"):
        load_settings()


def test_missing_file_path_is_fatal(monkeypatch):
    monkeypatch.setenv("CCFEED_BACKEND", "file")
    with pytest.raises(ConfigurationError, match="path"):
        load_settings()


def test_file_target(tmp_path):
    settings = AppSettings(backend="file", file=FileConfig(path=str(tmp_path / "cc.xml")))
    settings.require_target()
    assert settings.target == str(tmp_path / "cc.xml")


@pytest.mark.parametrize("raw, expected", [("644", 0o644), ("0o600", 0o600), ("640", 0o640)])
def test_file_mode_env_is_octal(monkeypatch, raw, expected):
    monkeypatch.setenv("CCFEED_FILE_MODE", raw)
    assert FileConfig().mode == expected


def test_file_mode_int_kept():
    assert FileConfig(mode=0o600).mode == 0o600


def test_codepipeline_timeout_and_reserve_defaults():
    settings = AppSettings()
    assert settings.codepipeline.timeout == 10.0
    assert settings.persist_reserve_seconds is None
