"""Static site facade tying configuration, resolution and metadata together."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from serve_static.config.loader import Config
from serve_static.libraries.listing import scan_entries
from serve_static.media.etag import etag_from_stat
from serve_static.media.mime import detect_mime
from serve_static.security.resolver import NOT_FOUND_ERRORS, resolve
from serve_static.validation.schemas import Entry

logger = logging.getLogger(__name__)


def strip_query(raw_uri: str) -> str:
    """Drop the query string and fragment from a request target."""
    path, _, _ = raw_uri.partition('?')
    path, _, _ = path.partition('#')
    return path


class StaticSite:
    """Resolve request paths against the configured root."""

    def __init__(self, config: Config):
        self.config = config

    @property
    def root(self) -> Path:
        return Path(self.config.root_path)

    def resolve(self, raw_uri: str) -> Path:
        """Resolve a request target; raises ResolveError subclasses."""
        return resolve(self.root, strip_query(raw_uri), allow_symlinks=self.config.allow_symlinks)

    def describe(self, path: Path) -> Optional[Dict[str, Any]]:
        """Metadata for a resolved regular file, or None when there is none."""
        try:
            stat = os.stat(path)
        except NOT_FOUND_ERRORS:
            return None
        if not os.path.isfile(path):
            return None
        return {
            'path': str(path),
            'size': stat.st_size,
            'mime': detect_mime(path),
            'etag': etag_from_stat(stat),
        }

    def listing(self, raw_uri: str) -> Optional[List[Entry]]:
        """Sorted entries for a directory request, None if not listable."""
        if not self.config.listing_enabled:
            return None
        path = self.resolve(raw_uri)
        if not path.is_dir():
            return None
        try:
            return scan_entries(path, show_hidden=self.config.show_hidden)
        except OSError as e:
            logger.warning(f"Cannot list directory for {raw_uri!r}: {e}")
            return None


def create_site(config_path: Optional[str] = None) -> StaticSite:
    """Load configuration, set up logging and build the site."""
    try:
        config = Config(config_path)
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        raise

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"Serving from {config.root_path} (allowSymlinks={config.allow_symlinks})")
    return StaticSite(config)
