"""MIME type detection from file names and content."""
import logging
import mimetypes
from pathlib import PurePath
from typing import Optional, Union

import magic

logger = logging.getLogger(__name__)

DEFAULT_MIME = 'application/octet-stream'

# libmagic answers that say nothing about the actual format
GENERIC_SNIFF_RESULTS = {
    'application/octet-stream',
    'application/x-empty',
    'inode/x-empty',
    'text/plain',
}

SNIFF_BYTES = 8192


def guess_from_extension(path_hint: Union[str, PurePath]) -> Optional[str]:
    """Guess a MIME type from the file extension only."""
    mime_type, _ = mimetypes.guess_type(PurePath(path_hint).name)
    if mime_type is None or mime_type == DEFAULT_MIME:
        return None
    return mime_type


def sniff_content(content: bytes) -> Optional[str]:
    """Identify content by its magic bytes, None when nothing specific matches."""
    if not content:
        return None
    try:
        mime = magic.Magic(mime=True)
        mime_type = mime.from_buffer(content[:SNIFF_BYTES])
    except Exception as e:
        logger.error(f"Magic detection failed: {e}")
        return None
    if not mime_type or mime_type in GENERIC_SNIFF_RESULTS:
        return None
    return mime_type


def detect_mime(path_hint: Union[str, PurePath], content: bytes = b'') -> str:
    """
    Detect the MIME type of a file.

    Order: extension, magic-byte sniffing of non-empty content, then
    ``text/plain`` for valid UTF-8 content, then ``application/octet-stream``.
    The path is only used for its name and is never opened.
    """
    mime_type = guess_from_extension(path_hint)
    if mime_type:
        return mime_type

    if content:
        mime_type = sniff_content(content)
        if mime_type:
            return mime_type
        try:
            content.decode('utf-8')
        except UnicodeDecodeError:
            pass
        else:
            return 'text/plain'

    return DEFAULT_MIME
