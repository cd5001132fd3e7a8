"""Concurrent per-page transform dispatch.

Every page is normalized (and optionally watermarked) into its own private
artifact in the work directory. Pages are transformed independently on a
bounded thread pool; the transforms themselves run out of process, so threads
spend their time waiting on the external tool. dispatch() returns only after
every task has finished.
"""

import logging
import os
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from schemas.config import RunConfig
from schemas.page import Page

from scan_assembler.exceptions import ExternalToolError, TransformError, WorkDirectoryError
from scan_assembler.transformers.transformer import PageTransformer

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "scan-assembler-"


def watermark_geometry(width: int, height: int, scale: int) -> tuple[int, int]:
    """Return the watermark (width, height) for a page of the given size.

    Each dimension is the page dimension floor-divided by *scale*, so a larger
    scale gives a smaller watermark. Never smaller than one pixel.
    """
    if scale < 1:
        raise ValueError(f"watermark scale must be >= 1, got {scale}")
    return max(width // scale, 1), max(height // scale, 1)


@dataclass
class DispatchReport:
    """Outcome of a dispatch run.

    Attributes:
        failures: Error message for each failed page, keyed by source path
    """

    failures: dict[Path, str] = field(default_factory=dict)


class TransformDispatcher:
    """Run the page transform for every page concurrently.

    Attributes:
        config: Run configuration
        transformer: Image service used for each page
    """

    def __init__(self, config: RunConfig, transformer: PageTransformer) -> None:
        self.config = config
        self.transformer = transformer

    def dispatch(self, pages: list[Page]) -> DispatchReport:
        """Transform all pages, setting working_path on each success.

        A failure on one page is logged and recorded in the report; sibling
        pages carry on. The failed page keeps working_path unset.

        Args:
            pages: Pages in document order

        Returns:
            DispatchReport listing the pages that failed

        Raises:
            WorkDirectoryError: If the work directory cannot be created
        """
        report = DispatchReport()
        if not pages:
            return report

        work_dir = self.config.work_dir
        try:
            work_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkDirectoryError(
                f"Cannot create work directory {work_dir}: {e.strerror or e}",
                path=work_dir,
            ) from e
        logger.info(f"Transforming {len(pages)} pages")

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_map: dict[Future, Page] = {
                executor.submit(self._transform_page, page): page for page in pages
            }
            for future in as_completed(future_map):
                page = future_map[future]
                try:
                    page.working_path = future.result()
                except TransformError as e:
                    logger.error(f"error processing page: {page.source_path}: {e.message}")
                    if e.output:
                        logger.error(e.output)
                    report.failures[page.source_path] = e.message
                    continue

                logger.info(f"processed page: {page.source_path}")

        return report

    def _transform_page(self, page: Page) -> Path:
        """Normalize and optionally watermark one page into a fresh artifact.

        The artifact is removed again if any step fails.

        Raises:
            TransformError: If allocation or either transform step fails
        """
        try:
            artifact = self._allocate_artifact(page)
        except OSError as e:
            raise TransformError(
                f"could not allocate artifact: {e}", source_path=page.source_path
            ) from e

        try:
            self.transformer.normalize(
                page.source_path,
                artifact,
                width=self.config.page_width,
                height=self.config.page_height,
                density=self.config.density,
            )
            if self.config.watermark_enabled:
                width, height = self.transformer.measure(artifact)
                self.transformer.watermark(
                    artifact,
                    self.config.watermark_path,
                    size=watermark_geometry(width, height, self.config.watermark_scale),
                    offset=self.config.watermark_offset,
                )
        except Exception as e:
            artifact.unlink(missing_ok=True)
            output = e.output if isinstance(e, ExternalToolError) else ""
            raise TransformError(
                str(e), source_path=page.source_path, output=output
            ) from e

        return artifact

    def _allocate_artifact(self, page: Page) -> Path:
        """Create a uniquely named empty file in the work directory."""
        fd, name = tempfile.mkstemp(
            prefix=ARTIFACT_PREFIX,
            suffix=page.source_path.suffix,
            dir=self.config.work_dir,
        )
        os.close(fd)
        return Path(name)
