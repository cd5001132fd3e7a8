"""Assemblers for producing the final multi-page document."""

from .assembler import DocumentAssembler
from .img2pdf_assembler import Img2PdfAssembler
from .pymupdf_assembler import PyMuPDFAssembler

ASSEMBLERS: dict[str, type[DocumentAssembler]] = {
    "img2pdf": Img2PdfAssembler,
    "pymupdf": PyMuPDFAssembler,
}

__all__ = [
    "ASSEMBLERS",
    "DocumentAssembler",
    "Img2PdfAssembler",
    "PyMuPDFAssembler",
]
