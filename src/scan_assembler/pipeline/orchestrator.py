"""Pipeline orchestrator for end-to-end page assembly.

Wires the stages together for a single run:

    discover -> index -> order -> dispatch -> bundle -> cleanup

Discovery and indexing failures stop the run before any page is touched.
Cleanup always runs once dispatch has started, whatever bundling does.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from schemas.config import RunConfig
from schemas.page import Page

from scan_assembler.assemblers import DocumentAssembler, Img2PdfAssembler
from scan_assembler.pipeline.bundler import Bundler
from scan_assembler.pipeline.cleanup import cleanup_pages
from scan_assembler.pipeline.discovery import discover_paths
from scan_assembler.pipeline.dispatcher import TransformDispatcher
from scan_assembler.pipeline.indexer import PageNumberExtractor, extract_page_number, index_pages
from scan_assembler.pipeline.ordering import order_pages
from scan_assembler.transformers import ImageMagickTransformer, PageTransformer

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Summary of a completed run.

    Attributes:
        output_path: The assembled document
        page_count: Number of pages in the document
    """

    output_path: Path
    page_count: int


class Orchestrator:
    """End-to-end assembly pipeline.

    Attributes:
        config: Run configuration shared read-only by every stage
        dispatcher: Concurrent per-page transform stage
        bundler: Document assembly stage
        extractor: Filename to page number rule
    """

    def __init__(
        self,
        config: RunConfig,
        transformer: PageTransformer | None = None,
        assembler: DocumentAssembler | None = None,
        extractor: PageNumberExtractor = extract_page_number,
    ):
        self.config = config
        self.extractor = extractor
        self.dispatcher = TransformDispatcher(config, transformer or ImageMagickTransformer())
        self.bundler = Bundler(config, assembler or Img2PdfAssembler())

    def plan(self) -> list[Page]:
        """Discover and index pages, returning them in document order.

        Raises:
            DiscoveryError: If the search root cannot be walked
            IndexingError: If a filename has no usable page number
        """
        paths = discover_paths(self.config.search_root, self.config.extensions)
        pages = order_pages(index_pages(paths, extractor=self.extractor))
        logger.info(f"Found {len(pages)} pages under {self.config.search_root}")
        return pages

    def run(self) -> RunResult:
        """Run the full pipeline and write the output document.

        Returns:
            RunResult for the written document

        Raises:
            DiscoveryError: If the search root cannot be walked
            IndexingError: If a filename has no usable page number
            WorkDirectoryError: If the work directory cannot be created
            BundlingError: If any page failed to transform or assembly fails
        """
        pages = self.plan()

        created_work_dir = not self.config.work_dir.exists()
        try:
            report = self.dispatcher.dispatch(pages)
            if report.failures:
                logger.warning(
                    f"{len(report.failures)} of {len(pages)} pages failed to transform"
                )
            output_path = self.bundler.bundle(pages)
        finally:
            cleanup_pages(pages, work_dir=self.config.work_dir if created_work_dir else None)

        return RunResult(
            output_path=output_path,
            page_count=len(pages),
        )
