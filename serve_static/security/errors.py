"""Path resolution errors."""
from pathlib import Path
from typing import Any, Dict, Optional


class ResolveError(Exception):
    """Base class for every failure of path resolution.

    Each subclass carries a machine-readable ``code`` and the HTTP status a
    caller should answer with. ``to_dict()`` never includes filesystem paths.
    """

    code = 'resolve_error'
    status = 400
    public_message = 'Invalid request path'

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.code, 'message': self.public_message}


class InvalidRoot(ResolveError):
    """The root directory is missing, inaccessible or not a directory."""

    code = 'invalid_root'
    status = 500
    public_message = 'Static root is not available'

    def __init__(self, path, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Invalid root path '{self.path}': {cause}")


class InvalidEncoding(ResolveError):
    """Malformed percent-encoding, or decoded bytes that are not UTF-8."""

    code = 'invalid_encoding'
    public_message = 'Invalid URI encoding'

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid URI encoding: {reason}")


class NullByte(ResolveError):
    """The decoded URI contains a null byte."""

    code = 'null_byte'
    public_message = 'Null byte in URI path'

    def __init__(self):
        super().__init__("Null byte in URI path")


class SymlinkTraversal(ResolveError):
    """A symlink resolved to a location outside the root."""

    code = 'symlink_traversal'
    public_message = 'Path escapes static root'

    def __init__(self, uri: Optional[str] = None):
        self.uri = uri
        super().__init__("Path traversal detected via symlink")


class SecurityIo(ResolveError):
    """Unexpected I/O failure while checking confinement.

    Kept apart from a plain missing file so callers never answer it with 404.
    """

    code = 'security_io'
    status = 403
    public_message = 'Path could not be verified'

    def __init__(self, cause: OSError):
        self.cause = cause
        super().__init__(f"Path resolution security error: {cause}")
