"""Init file for release fetchers."""

from kubedrift.controllers.releases.fetchers.release_fetcher import ReleaseFetcher

__all__ = ["ReleaseFetcher"]
