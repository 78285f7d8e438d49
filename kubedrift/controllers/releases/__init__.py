"""Init file for releases module."""

from kubedrift.controllers.releases.fetchers import ReleaseFetcher
from kubedrift.controllers.releases.parsers import ReleaseParser

__all__ = ["ReleaseFetcher", "ReleaseParser"]
