"""Page indexing: derive a page number from each discovered filename."""

import logging
import re
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from schemas.page import Page

from scan_assembler.exceptions import IndexingError

logger = logging.getLogger(__name__)

DIGIT_RUN = re.compile(r"\d+")

# Page numbers beyond a machine-sized integer are treated as unparseable.
MAX_PAGE_NUMBER = sys.maxsize

PageNumberExtractor = Callable[[str], int]


def extract_page_number(filename: str) -> int:
    """Return the page number encoded in *filename*.

    The page number is the last run of decimal digits in the filename stem,
    so ``scan-007.jpg`` is page 7 and ``page12b.jpg`` is page 12. Digits in
    the extension are ignored.

    Args:
        filename: Base filename (not a full path)

    Returns:
        The parsed page number

    Raises:
        ValueError: If the stem has no digit run or the run does not fit
            a machine-sized integer
    """
    stem = Path(filename).stem
    runs = DIGIT_RUN.findall(stem)
    if not runs:
        raise ValueError(f"no page number found in filename: {filename}")

    digits = runs[-1]
    try:
        number = int(digits)
    except ValueError as e:
        raise ValueError(f"page number is not an integer in filename: {filename}") from e
    if number > MAX_PAGE_NUMBER:
        raise ValueError(f"page number out of range in filename: {filename}")
    return number


def index_pages(
    paths: Iterable[Path],
    extractor: PageNumberExtractor = extract_page_number,
) -> list[Page]:
    """Build Page records for every discovered path.

    Consumes *paths* fully. The first filename without a usable page number
    aborts indexing; no partial collection is returned.

    Args:
        paths: Candidate paths, typically from discover_paths()
        extractor: Filename to page number rule

    Returns:
        Pages in discovery order (not yet sorted)

    Raises:
        IndexingError: If any filename has no usable page number
    """
    pages: list[Page] = []

    for path in paths:
        filename = path.name
        try:
            number = extractor(filename)
        except ValueError as e:
            raise IndexingError(str(e), filename=filename) from e

        pages.append(Page(source_path=path, page_number=number))
        logger.debug(f"found page: {path}")

    logger.info(f"Indexed {len(pages)} pages")
    return pages
