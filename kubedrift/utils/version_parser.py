"""Version parsing and drift counting utilities.

Provides functions to turn loosely formatted version labels and tag names
into semantic versions and to measure how far a deployed version lags
behind an upstream release history:
- parse_version: "v1.2.3", "release-1.2.3-rc.1" -> SemanticVersion
- count_newer_releases: deployed version + newest-first releases -> drift
- drift_severity / format_drift_count: drift -> presentation bucket/text
"""

from __future__ import annotations

from collections.abc import Sequence

from kubedrift.constants.enums import DriftSeverity
from kubedrift.constants.patterns import LEADING_NON_DIGITS_PATTERN, SEMVER_PATTERN
from kubedrift.constants.values import (
    MINOR_DRIFT_MAX,
    MODERATE_DRIFT_MAX,
    UNBOUNDED_DRIFT,
)
from kubedrift.models.releases.release_info import ReleaseRecord, SemanticVersion


def parse_version(raw: str | None) -> SemanticVersion | None:
    """Parse a version string into a SemanticVersion.

    Leading non-digit characters are dropped first, so prefixes such as
    ``v`` or ``release-`` are accepted.

    Args:
        raw: Version string (e.g., "v1.2.3", "1.4.0-rc1+build.5")

    Returns:
        SemanticVersion, or None when the string is not a semantic version.
    """
    if not isinstance(raw, str):
        return None

    candidate = LEADING_NON_DIGITS_PATTERN.sub("", raw.strip(), count=1)
    match = SEMVER_PATTERN.match(candidate)
    if match is None:
        return None

    prerelease = match.group("prerelease")
    build = match.group("build")
    return SemanticVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def count_newer_releases(
    deployed_version: str,
    releases: Sequence[ReleaseRecord],
) -> int | None:
    """Count releases newer than the deployed version.

    Args:
        deployed_version: Raw deployed version label
        releases: Release history ordered newest-first

    Returns:
        Number of leading releases strictly newer than the deployed version,
        UNBOUNDED_DRIFT when every fetched release is newer, or None when
        the drift cannot be determined.
    """
    deployed = parse_version(deployed_version)
    if deployed is None or not releases:
        return None

    baseline = deployed.without_prerelease()
    count = 0
    for release in releases:
        if not release.version > baseline:
            break
        count += 1

    if count == len(releases):
        return UNBOUNDED_DRIFT
    return count


def drift_severity(count: int | None) -> DriftSeverity:
    """Map a drift count onto its severity bucket."""
    if count is None:
        return DriftSeverity.UNKNOWN
    if count <= 0:
        return DriftSeverity.UP_TO_DATE
    if count <= MINOR_DRIFT_MAX:
        return DriftSeverity.MINOR
    if count <= MODERATE_DRIFT_MAX:
        return DriftSeverity.MODERATE
    return DriftSeverity.SEVERE


def format_drift_count(count: int | None, limit: int) -> str:
    """Render a drift count for display, e.g. ``3``, ``>30`` or ``Unknown``."""
    if count is None:
        return "Unknown"
    if count == UNBOUNDED_DRIFT:
        return f">{limit}"
    return str(count)
