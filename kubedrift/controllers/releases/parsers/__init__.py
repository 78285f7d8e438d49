"""Init file for release parsers."""

from kubedrift.controllers.releases.parsers.release_parser import ReleaseParser

__all__ = ["ReleaseParser"]
