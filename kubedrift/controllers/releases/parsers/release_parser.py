"""Release parser - turns GitHub release and tag payloads into ReleaseRecords."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

from kubedrift.constants.values import DISTANT_PAST
from kubedrift.models.releases.release_info import ReleaseRecord
from kubedrift.utils.version_parser import parse_version

logger = logging.getLogger(__name__)


def parse_github_timestamp(value: Any) -> datetime | None:
    """Parse GitHub ISO-8601 timestamps, with or without fractional seconds."""
    if not isinstance(value, str) or not value:
        return None
    with suppress(ValueError):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def newest_first_unique(records: Iterable[ReleaseRecord]) -> list[ReleaseRecord]:
    """Sort records newest-first and keep the first record per version."""
    ordered = sorted(records, key=lambda record: record.created_at, reverse=True)
    seen: set = set()
    unique: list[ReleaseRecord] = []
    for record in ordered:
        if record.version in seen:
            continue
        seen.add(record.version)
        unique.append(record)
    return unique


class ReleaseParser:
    """Parses GitHub REST and GraphQL payloads."""

    def parse_release(self, entry: dict[str, Any]) -> ReleaseRecord | None:
        """Parse one REST release entry.

        Drafts and entries whose tag is not a semantic version are dropped.
        """
        if entry.get("draft"):
            return None
        tag_name = entry.get("tag_name")
        version = parse_version(tag_name)
        if version is None:
            logger.debug("Dropping release with unparseable tag %r", tag_name)
            return None
        return ReleaseRecord(
            version=version,
            created_at=parse_github_timestamp(entry.get("created_at")) or DISTANT_PAST,
            prerelease=bool(entry.get("prerelease", False)),
        )

    def parse_releases(self, payload: list[dict[str, Any]]) -> list[ReleaseRecord]:
        """Parse a REST releases array into newest-first unique records."""
        parsed = (self.parse_release(entry) for entry in payload if isinstance(entry, dict))
        return newest_first_unique(record for record in parsed if record is not None)

    def parse_tag_ref(self, ref: dict[str, Any]) -> ReleaseRecord | None:
        """Parse one GraphQL tag ref node.

        Lightweight tags point at a commit (``committedDate``); annotated
        tags carry a tagger date. Tags without either get DISTANT_PAST.
        """
        version = parse_version(ref.get("name"))
        if version is None:
            return None
        target = ref.get("target") or {}
        tagger = target.get("tagger") or {}
        created_at = (
            parse_github_timestamp(target.get("committedDate"))
            or parse_github_timestamp(tagger.get("date"))
            or DISTANT_PAST
        )
        return ReleaseRecord(version=version, created_at=created_at, prerelease=False)

    def parse_tag_nodes(self, nodes: list[dict[str, Any]]) -> list[ReleaseRecord]:
        """Parse GraphQL tag ref nodes into newest-first unique records."""
        parsed = (self.parse_tag_ref(node) for node in nodes if isinstance(node, dict))
        return newest_first_unique(record for record in parsed if record is not None)
