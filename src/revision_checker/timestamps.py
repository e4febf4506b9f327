"""
UTC normalization of git commit timestamps.
"""

import re
from datetime import datetime, timezone

from .errors import TimestampParseError

GIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
UTC_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S +0000"

# strptime alone would also accept "+00:00", single-digit fields and "Z"
_GIT_TIMESTAMP_RE = re.compile(
    r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} [+-]\d{4}", re.ASCII
)


def parse_git_timestamp(value: str) -> datetime:
    """Parse git's ``%ci`` layout into an aware datetime."""
    if not _GIT_TIMESTAMP_RE.fullmatch(value):
        raise TimestampParseError(value)
    try:
        return datetime.strptime(value, GIT_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampParseError(value) from e


def normalize_to_utc(value: str) -> str:
    """
    Convert a ``YYYY-MM-DD HH:MM:SS +HHMM`` timestamp to UTC.

    The instant is converted, not relabeled:
    ``2025-09-24 02:55:10 -0700`` becomes ``2025-09-24 09:55:10 +0000``.

    Raises:
        TimestampParseError: If the value does not match the layout exactly
    """
    parsed = parse_git_timestamp(value)
    return parsed.astimezone(timezone.utc).strftime(UTC_TIMESTAMP_FORMAT)
