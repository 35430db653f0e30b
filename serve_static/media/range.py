"""HTTP Range header parsing (single byte ranges only)."""
import logging
from typing import Optional

from serve_static.validation.schemas import ByteRange

logger = logging.getLogger(__name__)

UNIT_PREFIX = 'bytes='


def _parse_offset(value: str) -> Optional[int]:
    value = value.strip()
    if not value or not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def parse_range(header: str, total_size: int) -> Optional[ByteRange]:
    """
    Parse a Range header value against a resource of total_size bytes.

    Supports ``bytes=start-end``, ``bytes=start-`` and ``bytes=-suffix``.
    The end offset is truncated to the last byte of the resource.

    Returns:
        The satisfiable ByteRange, or None when the header is malformed,
        lists several ranges, or cannot be satisfied (a 416 for the caller).
    """
    if total_size <= 0 or not header.startswith(UNIT_PREFIX):
        return None

    spec = header[len(UNIT_PREFIX):]
    if ',' in spec:
        logger.debug(f"Multi-range request not supported: {header!r}")
        return None

    start_str, sep, end_str = spec.partition('-')
    if not sep:
        return None

    if not start_str.strip():
        suffix = _parse_offset(end_str)
        if not suffix:
            return None
        start = max(total_size - suffix, 0)
        return ByteRange(start=start, length=total_size - start)

    start = _parse_offset(start_str)
    if start is None:
        return None

    if end_str.strip():
        end = _parse_offset(end_str)
        if end is None:
            return None
    else:
        end = total_size - 1

    if start > end or start >= total_size:
        return None

    end = min(end, total_size - 1)
    return ByteRange(start=start, length=end - start + 1)


def content_range(byte_range: ByteRange, total_size: int) -> str:
    """Build the Content-Range response value for a parsed range."""
    return f"bytes {byte_range.start}-{byte_range.end}/{total_size}"
