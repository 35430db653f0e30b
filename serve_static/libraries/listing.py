"""Directory listing entries and their ordering."""
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Union

from serve_static.validation.schemas import Entry

logger = logging.getLogger(__name__)


def sort_entries(entries: List[Entry]) -> None:
    """Sort in place: directories first, then names case-insensitively."""
    entries.sort(key=lambda entry: (not entry.is_dir, entry.name.lower()))


def scan_entries(directory: Union[str, Path], show_hidden: bool = False) -> List[Entry]:
    """
    Build sorted listing entries for a directory that was already resolved.

    Dot-files are skipped unless show_hidden is set. Entries that disappear
    or cannot be stat'ed while scanning (broken symlinks included) are left
    out with a warning. An OSError opening the directory itself propagates.
    """
    entries = []
    with os.scandir(directory) as it:
        for item in it:
            if not show_hidden and item.name.startswith('.'):
                continue
            try:
                is_dir = item.is_dir()
                stat = item.stat()
            except OSError as e:
                logger.warning(f"Cannot access item {item.name} in {directory}: {e}")
                continue
            entries.append(Entry(
                name=item.name,
                is_dir=is_dir,
                size=None if is_dir else stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            ))

    sort_entries(entries)
    logger.debug(f"Found {len(entries)} entries in {directory}")
    return entries
