"""Recursive discovery of candidate page images."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from scan_assembler.exceptions import DiscoveryError

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise DiscoveryError(
        f"Failed to walk {error.filename}: {error.strerror or error}",
        path=Path(error.filename) if error.filename else None,
    ) from error


def discover_paths(root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield files under *root* whose extension is in *extensions*.

    The walk is depth-first and lazy; paths come out in filesystem order.
    Extension matching is case-sensitive. Non-matching files are logged and
    skipped. Any I/O failure during the walk raises DiscoveryError, so a
    consumer building a collection from this generator gets nothing partial.

    Args:
        root: Directory to search
        extensions: Accepted extensions, e.g. ``(".jpg", ".jpeg")``

    Yields:
        Paths of matching files (directories are never yielded)

    Raises:
        DiscoveryError: If the root is missing or any entry cannot be read
    """
    accepted = frozenset(extensions)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.suffix not in accepted:
                logger.info(f"skipping: {path}")
                continue
            yield path
