"""Bundling of transformed pages into the output document."""

import logging
from pathlib import Path

from schemas.config import RunConfig
from schemas.page import Page

from scan_assembler.assemblers.assembler import DocumentAssembler
from scan_assembler.exceptions import BundlingError

logger = logging.getLogger(__name__)


class Bundler:
    """Hand the ordered page artifacts to a document assembler.

    Bundling is all-or-nothing over the ordered page set: if any page lacks
    an artifact, nothing is assembled.

    Attributes:
        config: Run configuration (supplies the output path)
        assembler: Document assembly service
    """

    def __init__(self, config: RunConfig, assembler: DocumentAssembler) -> None:
        self.config = config
        self.assembler = assembler

    def bundle(self, pages: list[Page]) -> Path:
        """Assemble every page's artifact, in order, into the output document.

        Args:
            pages: Pages in document order, after dispatch

        Returns:
            Path of the written document

        Raises:
            BundlingError: If pages are missing artifacts or assembly fails
        """
        if not pages:
            raise BundlingError("No pages to bundle")

        missing = [page.source_path for page in pages if not page.working_path]
        if missing:
            raise BundlingError(
                f"{len(missing)} of {len(pages)} pages have no transformed artifact",
                missing=missing,
            )

        output_path = self.config.output_path
        image_paths = [page.working_path for page in pages]

        logger.info(f"bundling {len(image_paths)} pages into {output_path}")
        try:
            size = self.assembler.assemble(image_paths, output_path)
        except BundlingError:
            self._discard_partial_output(output_path)
            raise
        except Exception as e:
            self._discard_partial_output(output_path)
            raise BundlingError(f"Assembly failed: {e}") from e

        logger.info(f"Wrote {output_path} ({size} bytes)")
        return output_path

    def _discard_partial_output(self, output_path: Path) -> None:
        """Remove a document left behind by a failed assembly."""
        try:
            output_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove partial output {output_path}: {e}")
