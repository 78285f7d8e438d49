"""Tests for release parser."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kubedrift.constants.values import DISTANT_PAST
from kubedrift.controllers.releases.parsers.release_parser import (
    ReleaseParser,
    parse_github_timestamp,
)
from kubedrift.models.releases.release_info import SemanticVersion


class TestParseGithubTimestamp:
    """Tests for parse_github_timestamp."""

    def test_zulu_timestamp(self) -> None:
        """Test a Z-suffixed timestamp is parsed as UTC."""
        assert parse_github_timestamp("2025-04-01T10:00:00Z") == datetime(
            2025, 4, 1, 10, tzinfo=timezone.utc
        )

    def test_fractional_seconds(self) -> None:
        """Test fractional seconds are accepted."""
        parsed = parse_github_timestamp("2025-04-01T10:00:00.123Z")
        assert parsed is not None
        assert parsed.microsecond == 123000

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12345])
    def test_invalid_values(self, value: object) -> None:
        """Test invalid values return None."""
        assert parse_github_timestamp(value) is None


class TestReleaseParser:
    """Tests for ReleaseParser class."""

    @pytest.fixture
    def parser(self) -> ReleaseParser:
        """Create a ReleaseParser instance."""
        return ReleaseParser()

    def test_parse_release(self, parser: ReleaseParser) -> None:
        """Test parsing a REST release entry."""
        record = parser.parse_release(
            {
                "tag_name": "v2.5.0",
                "created_at": "2025-02-01T00:00:00Z",
                "prerelease": False,
                "draft": False,
            }
        )

        assert record is not None
        assert record.version == SemanticVersion(2, 5, 0)
        assert record.created_at == datetime(2025, 2, 1, tzinfo=timezone.utc)
        assert record.prerelease is False

    def test_parse_release_prerelease_flag(self, parser: ReleaseParser) -> None:
        """Test the prerelease flag is carried over."""
        record = parser.parse_release(
            {"tag_name": "3.0.0-rc.1", "created_at": "2025-02-01T00:00:00Z", "prerelease": True}
        )
        assert record is not None
        assert record.prerelease is True

    def test_drafts_dropped(self, parser: ReleaseParser) -> None:
        """Test draft releases are ignored."""
        assert parser.parse_release({"tag_name": "v1.0.0", "draft": True}) is None

    def test_unparseable_tag_dropped(self, parser: ReleaseParser) -> None:
        """Test non-semver tags are ignored."""
        assert parser.parse_release({"tag_name": "nightly"}) is None

    def test_missing_created_at_is_distant_past(self, parser: ReleaseParser) -> None:
        """Test entries without a creation time sort last."""
        record = parser.parse_release({"tag_name": "v1.0.0"})
        assert record is not None
        assert record.created_at == DISTANT_PAST

    def test_parse_releases_sorted_and_deduplicated(self, parser: ReleaseParser) -> None:
        """Test releases are newest-first with one record per version."""
        payload = [
            {"tag_name": "v2.0.0", "created_at": "2025-01-01T00:00:00Z"},
            {"tag_name": "v3.0.0", "created_at": "2025-03-01T00:00:00Z"},
            {"tag_name": "2.0.0", "created_at": "2024-12-01T00:00:00Z"},
            {"tag_name": "junk", "created_at": "2025-04-01T00:00:00Z"},
            {"tag_name": "v2.5.0", "created_at": "2025-02-01T00:00:00Z", "draft": True},
        ]

        records = parser.parse_releases(payload)

        assert [str(record.version) for record in records] == ["3.0.0", "2.0.0"]
        assert records[1].created_at == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_parse_tag_ref_lightweight(self, parser: ReleaseParser) -> None:
        """Test lightweight tags use the commit date."""
        record = parser.parse_tag_ref(
            {"name": "v1.2.0", "target": {"committedDate": "2025-05-01T00:00:00Z"}}
        )
        assert record is not None
        assert record.created_at == datetime(2025, 5, 1, tzinfo=timezone.utc)
        assert record.prerelease is False

    def test_parse_tag_ref_annotated(self, parser: ReleaseParser) -> None:
        """Test annotated tags use the tagger date."""
        record = parser.parse_tag_ref(
            {"name": "v1.3.0", "target": {"tagger": {"date": "2025-06-01T00:00:00Z"}}}
        )
        assert record is not None
        assert record.created_at == datetime(2025, 6, 1, tzinfo=timezone.utc)

    def test_parse_tag_ref_without_dates(self, parser: ReleaseParser) -> None:
        """Test tags without any date get the distant past."""
        record = parser.parse_tag_ref({"name": "v1.0.0", "target": {}})
        assert record is not None
        assert record.created_at == DISTANT_PAST

    def test_parse_tag_nodes_skips_invalid(self, parser: ReleaseParser) -> None:
        """Test non-semver tag names are skipped."""
        nodes = [
            {"name": "latest", "target": {"committedDate": "2025-07-01T00:00:00Z"}},
            {"name": "v1.1.0", "target": {"committedDate": "2025-02-01T00:00:00Z"}},
            {"name": "v1.2.0", "target": {"committedDate": "2025-03-01T00:00:00Z"}},
        ]
        records = parser.parse_tag_nodes(nodes)
        assert [str(record.version) for record in records] == ["1.2.0", "1.1.0"]
