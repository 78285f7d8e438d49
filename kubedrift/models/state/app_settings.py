"""Application settings models."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubedrift.constants.defaults import (
    GITHUB_BASE_URL_DEFAULT,
    GITHUB_CONCURRENCY_DEFAULT,
    HISTORY_COUNT_DEFAULT,
    TAG_HISTORY_COUNT_DEFAULT,
)

logger = logging.getLogger(__name__)

LabelSelector = list[dict[str, list[str]]]


class GitHubApiSettings(BaseModel):
    """GitHub API endpoint settings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_url: str = GITHUB_BASE_URL_DEFAULT
    organization: str
    concurrency: int = Field(default=GITHUB_CONCURRENCY_DEFAULT, ge=1)

    @field_validator("base_url", "organization")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @property
    def sanitized_base_url(self) -> str:
        return self.base_url.strip("/")

    @property
    def graphql_url(self) -> str:
        return f"{self.sanitized_base_url}/graphql"


class GitHubSettings(BaseModel):
    """GitHub release lookup settings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Minimum number of formal releases before falling back to tags
    history_count: int = Field(default=HISTORY_COUNT_DEFAULT, ge=0)
    # Number of tags requested by the fallback query
    tag_history_count: int = Field(default=TAG_HISTORY_COUNT_DEFAULT, ge=1, le=100)
    api: GitHubApiSettings
    # "app=repository" lines
    services: list[str] = Field(default_factory=list)


class ServiceSettings(BaseModel):
    """Workload discovery settings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    selector: LabelSelector = Field(default_factory=list)
    rollout_selector: LabelSelector | None = None
    # Optional allow-list of application names
    filter: set[str] | None = None

    @property
    def effective_rollout_selector(self) -> LabelSelector:
        """Rollouts fall back to the deployment selector."""
        if self.rollout_selector is None:
            return self.selector
        return self.rollout_selector


class KubernetesSettings(BaseModel):
    """Kubernetes settings section."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    service: ServiceSettings = Field(default_factory=ServiceSettings)


class DriftSettings(BaseModel):
    """Top-level drift detection settings loaded from YAML."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    github: GitHubSettings
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)

    def service_mappings(self) -> dict[str, str]:
        """Parse ``app=repository`` service lines into a mapping.

        Malformed lines are skipped.
        """
        mappings: dict[str, str] = {}
        for line in self.github.services:
            parts = line.split("=", 1)
            if len(parts) != 2:
                logger.debug("Skipping malformed service mapping: %s", line)
                continue
            app_name, repository = (part.strip() for part in parts)
            if not app_name or not repository:
                logger.debug("Skipping malformed service mapping: %s", line)
                continue
            mappings[app_name] = repository
        return mappings


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigValidationError(ConfigError):
    """Raised when loaded settings fail validation."""
