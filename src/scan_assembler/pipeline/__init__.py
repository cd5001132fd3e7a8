"""Page ingestion, transformation and bundling pipeline."""

from .bundler import Bundler
from .cleanup import cleanup_pages
from .discovery import discover_paths
from .dispatcher import DispatchReport, TransformDispatcher, watermark_geometry
from .indexer import extract_page_number, index_pages
from .orchestrator import Orchestrator, RunResult
from .ordering import order_pages

__all__ = [
    "Bundler",
    "DispatchReport",
    "Orchestrator",
    "RunResult",
    "TransformDispatcher",
    "cleanup_pages",
    "discover_paths",
    "extract_page_number",
    "index_pages",
    "order_pages",
    "watermark_geometry",
]
