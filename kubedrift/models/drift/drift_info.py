"""Per-application drift result models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubedrift.models.releases.release_info import ReleaseRecord


class DeploymentVersionInfo(BaseModel):
    """Deployed version of one application in one context."""

    model_config = ConfigDict(frozen=True)

    version: str
    deployed_at: datetime
    # None means the drift could not be determined.
    drift: int | None = None


class ApplicationDriftInfo(BaseModel):
    """Drift of one application across every context it was found in."""

    model_config = ConfigDict(frozen=True)

    app_name: str
    deployments: dict[str, DeploymentVersionInfo] = Field(default_factory=dict)
    latest_release: ReleaseRecord | None = None
