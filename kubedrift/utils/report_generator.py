"""Drift report generator - renders drift results as a rich table or JSON."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from kubedrift.constants.values import (
    COLUMN_APP_NAME,
    COLUMN_LATEST_RELEASE,
    DATE_FORMAT,
    MISSING_CELL,
    NO_RELEASES_FOUND,
    REPORT_TITLE,
    UNBOUNDED_DRIFT,
)
from kubedrift.models.drift.drift_info import ApplicationDriftInfo, DeploymentVersionInfo
from kubedrift.models.releases.release_info import ReleaseRecord
from kubedrift.utils.version_parser import drift_severity, format_drift_count

logger = logging.getLogger(__name__)


class DriftReportGenerator:
    """Generate drift reports for a set of context aliases."""

    def __init__(
        self,
        drift_infos: list[ApplicationDriftInfo],
        context_aliases: list[str],
        release_count_limit: int,
    ) -> None:
        """Initialize the report generator.

        Args:
            drift_infos: Results sorted by application name
            context_aliases: Column order for contexts
            release_count_limit: Window shown for unbounded drift (">N")
        """
        self.drift_infos = drift_infos
        self.context_aliases = context_aliases
        self.release_count_limit = release_count_limit

    def format_drift_indicator(self, drift: int | None) -> Text:
        """Render ``[n]`` styled by severity."""
        severity = drift_severity(drift)
        label = f"[{format_drift_count(drift, self.release_count_limit)}]"
        return Text(label, style=severity.style)

    def format_deployment(self, deployment: DeploymentVersionInfo) -> Text:
        """Render ``version (date) [drift]`` for one context cell."""
        cell = Text(f"{deployment.version} ({deployment.deployed_at.strftime(DATE_FORMAT)}) ")
        cell.append_text(self.format_drift_indicator(deployment.drift))
        return cell

    @staticmethod
    def format_latest_release(release: ReleaseRecord | None) -> str:
        if release is None:
            return NO_RELEASES_FOUND
        return f"{release.version} ({release.created_at.strftime(DATE_FORMAT)})"

    def build_table(self) -> Table:
        """Build the results table: one row per app, one column per context."""
        table = Table(title=REPORT_TITLE, show_header=True, header_style="bold")
        table.add_column(COLUMN_APP_NAME)
        for alias in self.context_aliases:
            table.add_column(escape(alias))
        table.add_column(COLUMN_LATEST_RELEASE)

        for info in self.drift_infos:
            row: list[Text | str] = [Text(info.app_name)]
            for alias in self.context_aliases:
                deployment = info.deployments.get(alias)
                row.append(self.format_deployment(deployment) if deployment else MISSING_CELL)
            row.append(Text(self.format_latest_release(info.latest_release)))
            table.add_row(*row)
        return table

    def summary_lines(self) -> list[str]:
        """Build per-context summary lines and the unknown-version listing."""
        lines = ["Summary:", f"  Total applications: {len(self.drift_infos)}"]

        for alias in self.context_aliases:
            deployments = [
                info.deployments[alias] for info in self.drift_infos if alias in info.deployments
            ]
            up_to_date = sum(1 for d in deployments if d.drift == 0)
            behind = sum(1 for d in deployments if d.drift is not None and d.drift > 0)
            unknown = sum(1 for d in deployments if d.drift is None)
            lines.append(
                f"  {alias}: {len(deployments)} apps "
                f"({up_to_date} up-to-date, {behind} behind, {unknown} unknown)"
            )

        unknown_entries = [
            (info.app_name, alias, deployment.version)
            for info in self.drift_infos
            for alias, deployment in info.deployments.items()
            if deployment.drift is None
        ]
        if unknown_entries:
            lines.append("")
            lines.append("Apps with unknown versions (not found in GitHub):")
            lines.extend(
                f"  - {app_name} ({alias}): {version}"
                for app_name, alias, version in unknown_entries
            )
        return lines

    def render(self, console: Console) -> None:
        """Print the table and summary to a rich console."""
        if not self.drift_infos:
            logger.error("No application drift results found")
            return
        console.print()
        console.print(self.build_table())
        console.print()
        for line in self.summary_lines():
            console.print(line, markup=False, highlight=False)

    def generate_json_report(self) -> str:
        """Generate a JSON report with equivalent data."""
        applications: list[dict[str, Any]] = []
        for info in self.drift_infos:
            deployments: dict[str, Any] = {}
            for alias, deployment in info.deployments.items():
                deployments[alias] = {
                    "version": deployment.version,
                    "deployed_at": deployment.deployed_at.isoformat(),
                    "drift": (
                        None if deployment.drift in (None, UNBOUNDED_DRIFT) else deployment.drift
                    ),
                    "drift_unbounded": deployment.drift == UNBOUNDED_DRIFT,
                    "severity": drift_severity(deployment.drift).name.lower(),
                }
            latest = info.latest_release
            applications.append(
                {
                    "app_name": info.app_name,
                    "deployments": deployments,
                    "latest_release": (
                        {
                            "version": str(latest.version),
                            "created_at": latest.created_at.isoformat(),
                            "prerelease": latest.prerelease,
                        }
                        if latest
                        else None
                    ),
                }
            )
        report = {
            "contexts": self.context_aliases,
            "release_count_limit": self.release_count_limit,
            "applications": applications,
        }
        return json.dumps(report, indent=2)


__all__ = ["DriftReportGenerator"]
