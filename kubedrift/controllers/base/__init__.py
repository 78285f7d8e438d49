"""Init file for base controller module."""

from kubedrift.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
