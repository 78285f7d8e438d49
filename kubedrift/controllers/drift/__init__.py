"""Init file for drift module."""

from kubedrift.controllers.drift.controller import DriftController, calculate_drift
from kubedrift.controllers.drift.errors import DriftError, NoApplicationsFoundError

__all__ = ["DriftController", "DriftError", "NoApplicationsFoundError", "calculate_drift"]
