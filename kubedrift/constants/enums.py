"""All enum definitions for kubedrift.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Workload Enums
# =============================================================================

class WorkloadKind(Enum):
    """Kubernetes workload resource kinds inspected for deployed versions.

    Each member carries the API group path prefix and the plural resource
    name of its namespaced list endpoint.
    """

    PLAIN_DEPLOYMENT = ("Deployment", "/apis/apps/v1", "deployments")
    PROGRESSIVE_ROLLOUT = ("Rollout", "/apis/argoproj.io/v1alpha1", "rollouts")

    def __init__(self, display_name: str, api_prefix: str, plural: str) -> None:
        self.display_name = display_name
        self.api_prefix = api_prefix
        self.plural = plural

    def list_path(self, namespace: str) -> str:
        """Return the namespaced list endpoint path for this kind."""
        return f"{self.api_prefix}/namespaces/{namespace}/{self.plural}"


# =============================================================================
# Drift Enums
# =============================================================================

class DriftSeverity(Enum):
    """Drift severity buckets with their rich markup style."""

    UNKNOWN = ""
    UP_TO_DATE = "green"
    MINOR = "yellow"
    MODERATE = "red"
    SEVERE = "bold blink red"

    @property
    def style(self) -> str:
        """Rich style string (empty for unstyled)."""
        return self.value


class LogLevel(Enum):
    """Log levels accepted on the command line."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


__all__ = [
    "DriftSeverity",
    "LogLevel",
    "WorkloadKind",
]
