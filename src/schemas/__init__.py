"""Schema definitions for scan-assembler."""

from .config import RunConfig
from .page import Page

__all__ = [
    "Page",
    "RunConfig",
]
