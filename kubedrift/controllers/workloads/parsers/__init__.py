"""Init file for workload parsers."""

from kubedrift.controllers.workloads.parsers.workload_parser import (
    WorkloadParser,
    build_label_selector,
)

__all__ = ["WorkloadParser", "build_label_selector"]
