"""Normalized Kubernetes workload models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubedrift.constants.enums import WorkloadKind


class WorkloadRecord(BaseModel):
    """One running workload observation from a single cluster context."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(min_length=1)
    version: str
    observed_at: datetime
    context: str
    replicas: int = Field(default=0, ge=0)
    kind: WorkloadKind = WorkloadKind.PLAIN_DEPLOYMENT
