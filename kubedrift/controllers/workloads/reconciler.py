"""Reconciler - merges Deployment and Rollout records of the same application."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kubedrift.models.core.workload_info import WorkloadRecord

logger = logging.getLogger(__name__)


class WorkloadReconciler:
    """Selects one authoritative workload record per application name.

    An application migrating between a plain Deployment and an Argo
    Rollout shows up twice; the record that is currently serving
    (positive replicas) wins, ties broken by the most recent update.
    """

    @staticmethod
    def select(records: list[WorkloadRecord]) -> WorkloadRecord:
        """Pick the authoritative record from one application's group."""
        if len(records) == 1:
            return records[0]
        serving = [record for record in records if record.replicas > 0]
        candidates = serving or records
        return max(candidates, key=lambda record: record.observed_at)

    def reconcile(self, *workload_lists: Iterable[WorkloadRecord]) -> list[WorkloadRecord]:
        """Merge per-kind workload lists into one record per application.

        Args:
            workload_lists: Workload lists, typically Deployments then Rollouts

        Returns:
            One record per distinct application, in first-seen order.
        """
        groups: dict[str, list[WorkloadRecord]] = {}
        for workloads in workload_lists:
            for record in workloads:
                groups.setdefault(record.app_name, []).append(record)

        reconciled: list[WorkloadRecord] = []
        for app_name, records in groups.items():
            chosen = self.select(records)
            if len(records) > 1:
                logger.debug(
                    "Reconciled %d workloads for %s, using %s (%s replicas)",
                    len(records),
                    app_name,
                    chosen.kind.display_name,
                    chosen.replicas,
                )
            reconciled.append(chosen)
        return reconciled
