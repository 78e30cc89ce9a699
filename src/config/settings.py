# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific rendering settings: target
namespace, PipelineRun defaults, and logging.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Kubernetes object names are lowercase RFC 1123 labels.
_DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
_DURATION = re.compile(r"^(\d+(\.\d+)?(ns|us|ms|s|m|h))+$")


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Target cluster ===
    # Namespace the PipelineRuns and the revision-run ConfigMap are created in.
    pipeline_workspace: str = ""
    argocd_instance: str = "tekton-runs"

    # === PipelineRun defaults ===
    service_account: str = "default"
    pipeline_timeout: str = "1h"
    name_prefix: str = "st"

    # === Generic template rendering ===
    default_delimiter_style: Literal["curly", "square"] = "curly"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate values that end up inside rendered manifests."""
        errors: list[str] = []

        if not _DNS_LABEL.match(self.name_prefix):
            errors.append(
                f"NAME_PREFIX {self.name_prefix!r} is not a lowercase DNS label"
            )

        if not self.service_account.strip():
            errors.append("SERVICE_ACCOUNT must not be empty")

        if not _DURATION.match(self.pipeline_timeout):
            errors.append(
                f"PIPELINE_TIMEOUT {self.pipeline_timeout!r} is not a duration like '1h' or '30m'"
            )

        if self.pipeline_workspace and not _DNS_LABEL.match(self.pipeline_workspace):
            errors.append(
                f"PIPELINE_WORKSPACE {self.pipeline_workspace!r} is not a valid namespace"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def namespace(self) -> str:
        """Namespace rendered into every manifest."""
        return self.pipeline_workspace


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
