"""Weak ETag generation from file metadata."""
import os
from datetime import datetime, timezone
from typing import Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _nanoseconds_since_epoch(modified: Union[datetime, int]) -> int:
    if isinstance(modified, datetime):
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        delta = modified - EPOCH
        nanos = (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000
    else:
        nanos = int(modified)
    return max(nanos, 0)


def etag(modified: Union[datetime, int], size: int) -> str:
    """
    Build a weak ETag: ``W/"<hex ns since epoch>-<hex size>"``.

    ``modified`` is a datetime (naive values are read as UTC) or an integer
    count of nanoseconds. Times before the epoch clamp to 0.
    """
    return f'W/"{_nanoseconds_since_epoch(modified):x}-{size:x}"'


def etag_from_stat(stat_result: os.stat_result) -> str:
    """Weak ETag from a stat result, keeping full nanosecond precision."""
    return etag(stat_result.st_mtime_ns, stat_result.st_size)
