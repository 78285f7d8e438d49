"""Controllers for kubedrift data collection."""

from kubedrift.controllers.base import BaseController
from kubedrift.controllers.drift import DriftController

__all__ = ["BaseController", "DriftController"]
