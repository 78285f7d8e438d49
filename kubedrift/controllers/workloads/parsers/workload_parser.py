"""Workload parser - normalizes Deployment and Rollout items into WorkloadRecords."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

from kubedrift.constants.enums import WorkloadKind
from kubedrift.constants.values import (
    APP_LABEL,
    DISTANT_PAST,
    PROGRESSING_CONDITION,
    UNKNOWN_MARKER,
    VERSION_LABEL,
)
from kubedrift.models.core.workload_info import WorkloadRecord


def build_label_selector(selector: list[dict[str, list[str]]] | None) -> str:
    """Build a Kubernetes set-based label selector string.

    Each key becomes ``key in (v1,v2)``; all keys are ANDed with commas.

    Args:
        selector: List of mappings from label key to acceptable values

    Returns:
        Selector string, empty when there is nothing to select on.
    """
    clauses: list[str] = []
    for item in selector or []:
        for key, values in item.items():
            cleaned = [str(value).strip() for value in values or [] if str(value).strip()]
            if not cleaned:
                continue
            clauses.append(f"{key.strip()} in ({','.join(cleaned)})")
    return ",".join(clauses)


class WorkloadParser:
    """Parses workload list items into normalized records."""

    @staticmethod
    def _get_label_ci(labels: dict[str, Any] | None, key: str) -> str | None:
        """Look up a label value with a case-insensitive key match."""
        if not labels:
            return None
        wanted = key.lower()
        for label_key, value in labels.items():
            if isinstance(label_key, str) and label_key.lower() == wanted and value:
                return str(value)
        return None

    @staticmethod
    def _parse_iso_timestamp(timestamp: Any) -> datetime | None:
        """Parse kubernetes timestamp strings into aware datetimes."""
        if not isinstance(timestamp, str) or not timestamp:
            return None
        with suppress(ValueError, TypeError):
            parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        return None

    def parse_observed_at(self, status: dict[str, Any] | None) -> datetime:
        """Return the last update time of the newest Progressing condition."""
        latest: datetime | None = None
        for condition in (status or {}).get("conditions") or []:
            if condition.get("type") != PROGRESSING_CONDITION:
                continue
            if not condition.get("lastTransitionTime"):
                continue
            updated = self._parse_iso_timestamp(condition.get("lastUpdateTime"))
            if updated is not None and (latest is None or updated > latest):
                latest = updated
        return latest or DISTANT_PAST

    def parse_workload(
        self,
        item: dict[str, Any],
        *,
        context: str,
        kind: WorkloadKind,
    ) -> WorkloadRecord:
        """Parse a single Deployment or Rollout item.

        Args:
            item: Raw resource dictionary from the list response
            context: Cluster context the item was read from
            kind: Resource kind of the item

        Returns:
            WorkloadRecord object.
        """
        metadata = item.get("metadata") or {}
        spec = item.get("spec") or {}
        template_labels = ((spec.get("template") or {}).get("metadata") or {}).get("labels")

        app_name = (
            self._get_label_ci(metadata.get("labels"), APP_LABEL)
            or metadata.get("name")
            or UNKNOWN_MARKER
        )
        version = self._get_label_ci(template_labels, VERSION_LABEL) or UNKNOWN_MARKER

        replicas = 0
        with suppress(ValueError, TypeError):
            replicas = max(0, int(spec.get("replicas") or 0))

        return WorkloadRecord(
            app_name=app_name,
            version=version,
            observed_at=self.parse_observed_at(item.get("status")),
            context=context,
            replicas=replicas,
            kind=kind,
        )

    def parse_workloads(
        self,
        items: list[dict[str, Any]],
        *,
        context: str,
        kind: WorkloadKind,
    ) -> list[WorkloadRecord]:
        """Parse every item of a list response."""
        return [self.parse_workload(item, context=context, kind=kind) for item in items]
