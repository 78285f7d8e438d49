"""kubedrift - version drift detection for Kubernetes workloads."""

from kubedrift.constants.values import APP_VERSION

__version__ = APP_VERSION

__all__ = ["__version__"]
