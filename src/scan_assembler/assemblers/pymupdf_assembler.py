"""Assemble page images into a PDF with PyMuPDF."""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from scan_assembler.exceptions import BundlingError

from .assembler import DocumentAssembler

logger = logging.getLogger(__name__)


class PyMuPDFAssembler(DocumentAssembler):
    """Convert each page image to a one-page PDF and concatenate them."""

    def assemble(self, image_paths: list[Path], output_path: Path) -> int:
        if not image_paths:
            raise BundlingError("No page images to assemble")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        doc = fitz.open()
        try:
            for image_path in image_paths:
                self._append_image(doc, image_path)
            doc.save(str(output_path))
        except Exception as e:
            raise BundlingError(f"PyMuPDF failed on {output_path}: {e}") from e
        finally:
            doc.close()

        size = output_path.stat().st_size
        logger.debug(f"Wrote {size} bytes to {output_path}")
        return size

    def _append_image(self, doc: fitz.Document, image_path: Path) -> None:
        """Append *image_path* to *doc* as a single page."""
        img = fitz.open(str(image_path))
        try:
            pdf_bytes = img.convert_to_pdf()
        finally:
            img.close()

        img_pdf = fitz.open("pdf", pdf_bytes)
        try:
            doc.insert_pdf(img_pdf)
        finally:
            img_pdf.close()
