"""Version ordering — numeric, dot-separated, zero-padded on the right."""

import re
from enum import IntEnum

from packaging.version import Version, InvalidVersion

from launchgate.core.errors import InvalidVersionFormat

_VERSION_RE = re.compile(r'[0-9]+(\.[0-9]+)*')


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def parse_version(value: str) -> Version:
    """Validate ``value`` and return a comparable ``Version``.

    Only plain release numbers are accepted ("2", "2.10.1"); prefixes,
    pre-release tags and signs raise ``InvalidVersionFormat``.
    """
    if not isinstance(value, str):
        raise InvalidVersionFormat(f"version must be a string, got {type(value).__name__}")
    s = value.strip()
    if not _VERSION_RE.fullmatch(s):
        raise InvalidVersionFormat(f"invalid version: {value!r}")
    try:
        return Version(s)
    except (InvalidVersion, ValueError) as e:
        raise InvalidVersionFormat(f"invalid version: {value!r}") from e


def is_valid_version(value: str) -> bool:
    try:
        parse_version(value)
    except InvalidVersionFormat:
        return False
    return True


def compare(a: str, b: str) -> Ordering:
    """Compare two version strings component-wise.

    "9.0" < "10.0" and "2.1" == "2.1.0".
    """
    va, vb = parse_version(a), parse_version(b)
    if va < vb:
        return Ordering.LESS
    if va > vb:
        return Ordering.GREATER
    return Ordering.EQUAL
