"""Base class for page image transformers.

A PageTransformer wraps the image-processing service that normalizes each
scanned page and composites the optional watermark onto it. Implementations
are called concurrently from the dispatcher, one page per call, and must not
share mutable state between calls.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class PageTransformer(ABC):
    """Abstract base class for per-page image transforms."""

    @abstractmethod
    def normalize(
        self,
        source: Path,
        destination: Path,
        width: int,
        height: int,
        density: int,
    ) -> None:
        """Resample *source* into *destination*.

        The result is resized to fit width x height, written at the given
        density, orientation-corrected from its metadata and stripped of
        extraneous metadata.

        Raises:
            ExternalToolError: If the service reports a failure
        """
        pass

    @abstractmethod
    def watermark(
        self,
        page: Path,
        watermark: Path,
        size: tuple[int, int],
        offset: tuple[int, int],
    ) -> None:
        """Composite *watermark* onto *page* in place.

        Args:
            page: Normalized page image, overwritten with the result
            watermark: Watermark image
            size: Watermark target (width, height) in pixels
            offset: Placement (x, y) from the top-left corner

        Raises:
            ExternalToolError: If the service reports a failure
        """
        pass

    @abstractmethod
    def measure(self, image: Path) -> tuple[int, int]:
        """Return the (width, height) of *image* in pixels."""
        pass
