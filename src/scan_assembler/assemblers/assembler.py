"""Base class for document assemblers."""

from abc import ABC, abstractmethod
from pathlib import Path


class DocumentAssembler(ABC):
    """Abstract base class for document assemblers.

    Assemblers combine an ordered list of page images into one multi-page
    document in a single call.
    """

    @abstractmethod
    def assemble(self, image_paths: list[Path], output_path: Path) -> int:
        """Write *image_paths*, in order, as one document at *output_path*.

        Args:
            image_paths: Page images in document order
            output_path: Destination document path

        Returns:
            Size of the written document in bytes

        Raises:
            BundlingError: If the document cannot be produced
        """
        pass
