"""Upstream release models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import total_ordering

from pydantic import BaseModel, ConfigDict


def _prerelease_key(identifier: str) -> tuple[int, int, str]:
    """Order numeric identifiers numerically and before alphanumeric ones."""
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """A parsed semantic version.

    Equality and ordering follow SemVer 2.0 precedence: build metadata is
    ignored, and a version with prerelease identifiers sorts below the same
    version without them.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default_factory=tuple)
    build: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def without_prerelease(self) -> SemanticVersion:
        """Return a copy with prerelease and build identifiers dropped."""
        return replace(self, prerelease=(), build=())

    def _precedence_key(self) -> tuple:
        # An empty prerelease must outrank any non-empty one.
        prerelease_rank = (
            (1, ())
            if not self.prerelease
            else (0, tuple(_prerelease_key(part) for part in self.prerelease))
        )
        return (self.major, self.minor, self.patch, prerelease_rank)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


class ReleaseRecord(BaseModel):
    """One upstream release or tag."""

    model_config = ConfigDict(frozen=True)

    version: SemanticVersion
    created_at: datetime
    prerelease: bool = False
