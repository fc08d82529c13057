"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from ccfeed.core.exceptions import ConfigurationError


class S3Config(BaseSettings):
    """S3 feed target configuration."""

    model_config = {"env_prefix": "CCFEED_S3_", "populate_by_name": True}

    # BUCKET / KEY are the names older deployments were configured with
    bucket: str = Field("", validation_alias=AliasChoices("CCFEED_S3_BUCKET", "BUCKET"))
    key: str = Field("", validation_alias=AliasChoices("CCFEED_S3_KEY", "KEY"))
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    timeout: float = 15.0
    acl: str = "public-read"


class FileConfig(BaseSettings):
    """Local file feed target configuration."""

    model_config = {"env_prefix": "CCFEED_FILE_"}

    path: str = ""
    mode: int = 0o644

    @field_validator("mode", mode="before")
    @classmethod
    def parse_octal(cls, value: object) -> object:
        # env values are permission strings such as "644" or "0o644"
        if isinstance(value, str):
            return int(value, 8)
        return value


class CodePipelineConfig(BaseSettings):
    """CodePipeline state source configuration."""

    model_config = {"env_prefix": "CCFEED_CODEPIPELINE_"}

    region: str = "us-east-1"
    endpoint_url: str | None = None
    timeout: float = 10.0  # per request, must fit inside the cycle deadline


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "CCFEED_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    backend: Literal["s3", "file"] = "s3"
    granularity: Literal["pipeline", "stage"] = "stage"
    deadline_seconds: float = 25.0
    # None: reserve the feed store's own timeout before starting a persist
    persist_reserve_seconds: float | None = None

    s3: S3Config = Field(default_factory=S3Config)
    file: FileConfig = Field(default_factory=FileConfig)
    codepipeline: CodePipelineConfig = Field(default_factory=CodePipelineConfig)

    def require_target(self) -> None:
        """Fail fast when the selected backend has no destination configured."""
        if self.backend == "s3":
            missing = [
                name for name, value in (("bucket", self.s3.bucket), ("key", self.s3.key))
                if not value
            ]
            if missing:
                raise ConfigurationError(
                    f"S3 backend requires {' and '.join(missing)} "
                    "(CCFEED_S3_BUCKET/CCFEED_S3_KEY or BUCKET/KEY)"
                )
        elif not self.file.path:
            raise ConfigurationError("file backend requires a path (CCFEED_FILE_PATH)")

    @property
    def target(self) -> str:
        if self.backend == "s3":
            return f"s3://{self.s3.bucket}/{self.s3.key}"
        return self.file.path


def load_settings() -> AppSettings:
    """Load settings from the environment and validate the feed target."""
    settings = AppSettings()
    settings.require_target()
    return settings
