"""Pseudo-version classification and comparison."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from untagged_deps.exceptions import NoTimestampFoundError

# Pseudo-versions end with a commit timestamp and a 12-char commit hash:
#   v0.0.0-20231129151722-fdeea329fbba     (no base tag)
#   v1.1.1-0.20251215205057-2f3252140e00   (based on an existing tag)
PSEUDO_VERSION_RE = re.compile(r"[0-9]{14}-[a-f0-9]{12}\Z")

# First 14-digit run anywhere in the string, not necessarily the trailing one.
TIMESTAMP_RE = re.compile(r"[0-9]{14}")

_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def is_pseudo_version(version: str) -> bool:
    return PSEUDO_VERSION_RE.search(version) is not None


def extract_timestamp(version: str) -> str:
    """Return the ``YYYYMMDDHHMMSS`` timestamp embedded in *version*.

    Raises :class:`NoTimestampFoundError` if there is none.
    """
    match = TIMESTAMP_RE.search(version)
    if match is None:
        raise NoTimestampFoundError(version)
    return match.group(0)


def newer_version(a: str, b: str) -> str:
    """Return whichever of *a* and *b* carries the more recent timestamp.

    Ties go to *a*.  Both timestamps are fixed-width, so string order is
    chronological order.
    """
    ts_a = extract_timestamp(a)
    ts_b = extract_timestamp(b)
    if ts_a >= ts_b:
        return a
    return b


def commit_time(version: str) -> datetime:
    """Parse the embedded timestamp as a UTC datetime."""
    ts = extract_timestamp(version)
    try:
        return datetime.strptime(ts, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise NoTimestampFoundError(version) from exc
