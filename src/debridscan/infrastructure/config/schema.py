"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class BackgroundConfig(BaseModel):
    """Connection to the background service that owns the debrid account."""

    base_url: str = Field(
        default="http://127.0.0.1:7980",
        description="Base URL of the background service HTTP endpoint.",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout in seconds.",
    )

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("background.base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("background.timeout_seconds must be > 0")
        return v


class ScanConfig(BaseModel):
    """Scanner timing."""

    pattern_ttl_seconds: float = Field(
        default=300.0,
        description="How long fetched hoster patterns stay fresh.",
    )
    debounce_seconds: float = Field(
        default=1.0,
        description="Quiet period after the last DOM insertion before rescanning.",
    )

    @field_validator("pattern_ttl_seconds", "debounce_seconds")
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("scan timings must be > 0")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (background/scan/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    app_name: str = Field(default="debridscan", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    background: BackgroundConfig = Field(default_factory=BackgroundConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "background": self.background.model_dump(),
            "scan": self.scan.model_dump(),
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - DEBRIDSCAN_BACKGROUND_URL
    - DEBRIDSCAN_PATTERN_TTL_SECONDS
    - DEBRIDSCAN_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="DEBRIDSCAN_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    background_url: Optional[str] = None
    background_timeout_seconds: Optional[float] = None

    pattern_ttl_seconds: Optional[float] = None
    debounce_seconds: Optional[float] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
