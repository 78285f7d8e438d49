"""Regex patterns for data parsing."""

import re

_IDENTIFIER = r"[0-9A-Za-z-]+"

SEMVER_PATTERN = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    rf"(?:-(?P<prerelease>{_IDENTIFIER}(?:\.{_IDENTIFIER})*))?"
    rf"(?:\+(?P<build>{_IDENTIFIER}(?:\.{_IDENTIFIER})*))?$"
)
LEADING_NON_DIGITS_PATTERN = re.compile(r"^\D*")

__all__ = [
    "LEADING_NON_DIGITS_PATTERN",
    "SEMVER_PATTERN",
]
