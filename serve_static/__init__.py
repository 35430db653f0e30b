"""Safe path resolution and metadata helpers for static file servers."""
from serve_static.libraries.listing import scan_entries, sort_entries
from serve_static.media.etag import etag, etag_from_stat
from serve_static.media.mime import detect_mime
from serve_static.media.range import content_range, parse_range
from serve_static.security.errors import (
    InvalidEncoding,
    InvalidRoot,
    NullByte,
    ResolveError,
    SecurityIo,
    SymlinkTraversal,
)
from serve_static.security.resolver import PathResolver, resolve
from serve_static.validation.schemas import ByteRange, Entry

__all__ = [
    'ByteRange', 'Entry', 'PathResolver', 'resolve',
    'ResolveError', 'InvalidRoot', 'InvalidEncoding', 'NullByte', 'SymlinkTraversal', 'SecurityIo',
    'detect_mime', 'etag', 'etag_from_stat', 'parse_range', 'content_range',
    'sort_entries', 'scan_entries',
]
