"""Scalar constants for kubedrift.

All application-level constants with proper type hints using Final.
"""

import sys
from datetime import datetime, timezone
from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kubedrift"
APP_VERSION: Final = "0.1.0"
USER_AGENT: Final = f"{APP_NAME}/{APP_VERSION}"

# ============================================================================
# Workload normalization
# ============================================================================

UNKNOWN_MARKER: Final = "<unknown>"
VERSION_LABEL: Final = "version"
APP_LABEL: Final = "app"
PROGRESSING_CONDITION: Final = "Progressing"

# Stand-in timestamp for workloads and tags that carry no usable date.
DISTANT_PAST: Final = datetime(1, 1, 1, tzinfo=timezone.utc)

# ============================================================================
# Drift thresholds
# ============================================================================

# Sentinel drift count: every fetched release is newer than the deployment.
UNBOUNDED_DRIFT: Final = sys.maxsize

MINOR_DRIFT_MAX: Final = 10
MODERATE_DRIFT_MAX: Final = 20

# ============================================================================
# GitHub API
# ============================================================================

GITHUB_ACCEPT_HEADER: Final = "application/vnd.github.v3+json"
RATE_LIMIT_REMAINING_HEADER: Final = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER: Final = "X-RateLimit-Reset"

# ============================================================================
# Report
# ============================================================================

REPORT_TITLE: Final = "DRIFT DETECTION RESULTS"
COLUMN_APP_NAME: Final = "App Name"
COLUMN_LATEST_RELEASE: Final = "GitHub Latest Release"
NO_RELEASES_FOUND: Final = "No releases found"
MISSING_CELL: Final = "-"
DATE_FORMAT: Final = "%Y-%m-%d"

__all__ = [
    "APP_LABEL",
    "APP_NAME",
    "APP_VERSION",
    "COLUMN_APP_NAME",
    "COLUMN_LATEST_RELEASE",
    "DATE_FORMAT",
    "DISTANT_PAST",
    "GITHUB_ACCEPT_HEADER",
    "MINOR_DRIFT_MAX",
    "MISSING_CELL",
    "MODERATE_DRIFT_MAX",
    "NO_RELEASES_FOUND",
    "PROGRESSING_CONDITION",
    "RATE_LIMIT_REMAINING_HEADER",
    "RATE_LIMIT_RESET_HEADER",
    "REPORT_TITLE",
    "UNBOUNDED_DRIFT",
    "UNKNOWN_MARKER",
    "USER_AGENT",
    "VERSION_LABEL",
]
