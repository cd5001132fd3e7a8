"""Assemble page images into a PDF with img2pdf."""

import logging
from pathlib import Path

import img2pdf

from scan_assembler.exceptions import BundlingError

from .assembler import DocumentAssembler

logger = logging.getLogger(__name__)


class Img2PdfAssembler(DocumentAssembler):
    """Embed each page image losslessly as one PDF page using img2pdf."""

    def assemble(self, image_paths: list[Path], output_path: Path) -> int:
        if not image_paths:
            raise BundlingError("No page images to assemble")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            pdf_bytes = img2pdf.convert([str(p) for p in image_paths])
        except Exception as e:
            raise BundlingError(f"img2pdf failed: {e}") from e

        output_path.write_bytes(pdf_bytes)
        logger.debug(f"Wrote {len(pdf_bytes)} bytes to {output_path}")
        return len(pdf_bytes)
