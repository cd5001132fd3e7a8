"""Removal of per-page artifacts once a run is over."""

import logging
from collections.abc import Iterable
from pathlib import Path

from schemas.page import Page

logger = logging.getLogger(__name__)


def cleanup_pages(pages: Iterable[Page], work_dir: Path | None = None) -> int:
    """Delete every page's artifact, best effort.

    Missing artifacts are ignored and deletion failures are logged, never
    raised. If *work_dir* is given and ends up empty it is removed too.

    Args:
        pages: Pages whose working_path artifacts should be removed
        work_dir: Scratch directory to remove when empty

    Returns:
        Number of artifacts deleted
    """
    removed = 0

    for page in pages:
        if not page.working_path:
            continue
        try:
            page.working_path.unlink()
            removed += 1
        except FileNotFoundError:
            logger.debug(f"Artifact already gone: {page.working_path}")
        except OSError as e:
            logger.warning(f"Could not remove artifact {page.working_path}: {e}")

    if work_dir is not None and work_dir.is_dir():
        try:
            work_dir.rmdir()
        except OSError:
            logger.debug(f"Leaving non-empty work directory {work_dir}")

    logger.debug(f"Removed {removed} artifacts")
    return removed
