"""Init file for workload fetchers."""

from kubedrift.controllers.workloads.fetchers.workload_fetcher import WorkloadFetcher

__all__ = ["WorkloadFetcher"]
