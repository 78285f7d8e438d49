"""Init file for workloads module."""

from kubedrift.controllers.workloads.fetchers import WorkloadFetcher
from kubedrift.controllers.workloads.parsers import WorkloadParser, build_label_selector
from kubedrift.controllers.workloads.reconciler import WorkloadReconciler

__all__ = ["WorkloadFetcher", "WorkloadParser", "WorkloadReconciler", "build_label_selector"]
