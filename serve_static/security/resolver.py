"""Confine untrusted URI paths to a static root directory."""
import errno
import logging
import os
import re
from pathlib import Path
from typing import List, Union
from urllib.parse import unquote_to_bytes

from serve_static.security.errors import (
    InvalidEncoding,
    InvalidRoot,
    NullByte,
    SecurityIo,
    SymlinkTraversal,
)

logger = logging.getLogger(__name__)

# A '%' that does not start a two-digit hex escape
_BAD_PERCENT = re.compile(r'%(?![0-9A-Fa-f]{2})')

# Errors that mean "this path does not exist (yet)". ENOTDIR shows up when a
# middle component is a regular file.
NOT_FOUND_ERRORS = (FileNotFoundError, NotADirectoryError)


class PathResolver:
    """Resolve URI paths under a root without ever leaving it."""

    @staticmethod
    def canonical_root(root: Union[str, Path]) -> Path:
        """Canonicalize the root directory, raising InvalidRoot on failure."""
        try:
            canonical = Path(os.path.realpath(root, strict=True))
        except OSError as e:
            raise InvalidRoot(root, e) from e
        if not canonical.is_dir():
            cause = NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root))
            raise InvalidRoot(root, cause)
        return canonical

    @staticmethod
    def decode_uri(uri: str) -> str:
        """
        Percent-decode a URI path exactly once.

        Raises InvalidEncoding for a malformed escape or non-UTF-8 bytes, and
        NullByte when the decoded text contains NUL.
        """
        bad = _BAD_PERCENT.search(uri)
        if bad:
            raise InvalidEncoding(f"malformed escape at offset {bad.start()}")
        try:
            decoded = unquote_to_bytes(uri).decode('utf-8')
        except UnicodeError as e:
            raise InvalidEncoding(str(e)) from e
        if '\0' in decoded:
            raise NullByte()
        return decoded

    @staticmethod
    def components(decoded: str) -> List[str]:
        """Split decoded text on '/' dropping empty and '.' segments."""
        return [part for part in decoded.split('/') if part not in ('', '.')]

    @staticmethod
    def normalize(root: Path, decoded: str) -> Path:
        """
        Apply decoded path components to root, in memory only.

        '..' removes the last segment but never goes above root.
        """
        resolved = root
        for part in PathResolver.components(decoded):
            if part == '..':
                if resolved != root:
                    resolved = resolved.parent
            else:
                resolved = resolved / part
        return resolved

    @staticmethod
    def is_confined(path: Path, root: Path) -> bool:
        """Component-wise containment check (no string prefix tricks)."""
        try:
            path.relative_to(root)
        except ValueError:
            return False
        return True

    @staticmethod
    def check_ancestors(resolved: Path, root: Path, uri: str) -> None:
        """
        Verify the nearest existing ancestor of a missing path stays in root.

        Walks upward one segment at a time and stops at root. Raises
        SymlinkTraversal on escape and SecurityIo on any unexpected error.
        """
        for ancestor in resolved.parents:
            if ancestor == root:
                return
            try:
                canonical = Path(os.path.realpath(ancestor, strict=True))
            except NOT_FOUND_ERRORS:
                continue
            except OSError as e:
                logger.warning(f"Ancestor check failed for {uri!r} at {ancestor}: {e}")
                raise SecurityIo(e) from e
            if not PathResolver.is_confined(canonical, root):
                logger.warning(f"Symlink escape via ancestor {ancestor} for {uri!r}")
                raise SymlinkTraversal(uri)
            return

    @staticmethod
    def resolve(root: Union[str, Path], uri: str, *, allow_symlinks: bool) -> Path:
        """
        Resolve an untrusted URI path to a filesystem path under root.

        The path may not exist; deciding on 404 is left to the caller.

        Args:
            root: Directory to confine results to. Canonicalized on every call.
            uri: Raw, percent-encoded request path. Query strings and
                fragments are treated as literal path text.
            allow_symlinks: When True, symlink checks are skipped entirely and
                the normalized path is returned as-is. Only use this for
                trusted roots.

        Returns:
            The canonical path when the target exists and symlinks are
            checked, otherwise the normalized path.

        Raises:
            InvalidRoot, InvalidEncoding, NullByte, SymlinkTraversal, SecurityIo
        """
        canonical_root = PathResolver.canonical_root(root)
        decoded = PathResolver.decode_uri(uri)
        resolved = PathResolver.normalize(canonical_root, decoded)

        if allow_symlinks:
            logger.debug(f"Resolved {uri!r} -> {resolved} (symlinks allowed)")
            return resolved

        try:
            canonical = Path(os.path.realpath(resolved, strict=True))
        except NOT_FOUND_ERRORS:
            PathResolver.check_ancestors(resolved, canonical_root, uri)
            logger.debug(f"Resolved {uri!r} -> {resolved} (does not exist)")
            return resolved
        except OSError as e:
            logger.warning(f"Could not verify {uri!r}: {e}")
            raise SecurityIo(e) from e

        if not PathResolver.is_confined(canonical, canonical_root):
            logger.warning(f"Symlink escape for {uri!r}: target outside root")
            raise SymlinkTraversal(uri)

        logger.debug(f"Resolved {uri!r} -> {canonical}")
        return canonical


def resolve(root: Union[str, Path], uri: str, *, allow_symlinks: bool) -> Path:
    """Shortcut for PathResolver.resolve."""
    return PathResolver.resolve(root, uri, allow_symlinks=allow_symlinks)
