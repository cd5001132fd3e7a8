"""Page domain object."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Page:
    """One input image mapped to one page of the output document.

    Attributes:
        source_path: Path to the original image, set at discovery
        page_number: Number parsed from the filename; defines document order
        working_path: Path to this page's transformed artifact, set once the
            transform succeeds
    """

    source_path: Path
    page_number: int
    working_path: Path | None = None
