"""Command-line interface for scan-assembler."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from schemas.config import DEFAULT_EXTENSIONS, DEFAULT_WORK_DIR, RunConfig

from scan_assembler.assemblers import ASSEMBLERS
from scan_assembler.exceptions import BundlingError, ScanAssemblerError, WorkDirectoryError
from scan_assembler.pipeline.discovery import discover_paths
from scan_assembler.pipeline.indexer import index_pages
from scan_assembler.pipeline.orchestrator import Orchestrator
from scan_assembler.pipeline.ordering import order_pages
from scan_assembler.transformers import ImageMagickTransformer

DEFAULT_ASSEMBLER = "img2pdf"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def parse_extensions(value: str) -> tuple[str, ...]:
    """Split a comma-separated extension list, dropping blanks."""
    return tuple(ext.strip() for ext in value.split(",") if ext.strip())


def build_config(args: argparse.Namespace) -> RunConfig:
    """Build the run configuration from parsed arguments.

    Raises:
        pydantic.ValidationError: If any value is out of range
    """
    return RunConfig(
        search_root=args.dir,
        output_path=args.output,
        extensions=args.ext,
        watermark_path=args.watermark,
        watermark_scale=args.size,
        page_width=args.width,
        page_height=args.height,
        density=args.density,
        work_dir=args.workdir,
        max_workers=args.workers,
    )


def assemble(args: argparse.Namespace) -> int:
    """Execute the assemble command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if config.watermark_enabled and not config.watermark_path.is_file():
        logger.error(f"Watermark file not found: {config.watermark_path}")
        return 1

    transformer = ImageMagickTransformer(
        convert_binary=args.convert_binary,
        magick_binary=args.magick_binary,
    )
    assembler = ASSEMBLERS[args.assembler]()

    try:
        orchestrator = Orchestrator(config, transformer=transformer, assembler=assembler)
        result = orchestrator.run()
    except BundlingError as e:
        logger.error(f"error bundling pages: {e.message}")
        for path in e.missing:
            logger.error(f"    - missing: {path}")
        return 1
    except WorkDirectoryError as e:
        logger.error(f"error preparing work directory: {e.message}")
        return 1
    except ScanAssemblerError as e:
        logger.error(f"error ingesting pages: {e.message}")
        return 1

    logger.info(f"Assembled document: {result.output_path}")
    logger.info(f"  Pages: {result.page_count}")
    return 0


def list_pages(args: argparse.Namespace) -> int:
    """Execute the list-pages command.

    Prints the discovered pages in document order without transforming them.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        paths = discover_paths(args.dir, args.ext)
        pages = order_pages(index_pages(paths))
    except ScanAssemblerError as e:
        logger.error(f"error ingesting pages: {e.message}")
        return 1

    for page in pages:
        print(f"{page.page_number}\t{page.source_path}")
    return 0


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dir",
        type=Path,
        required=True,
        help="Input directory search path for pages",
    )
    parser.add_argument(
        "--ext",
        type=parse_extensions,
        default=DEFAULT_EXTENSIONS,
        help=f"Comma-separated list of supported file extensions (default: {','.join(DEFAULT_EXTENSIONS)})",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="scan-assembler",
        description="Assemble a directory of scanned page images into a single PDF",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    assemble_parser = subparsers.add_parser(
        "assemble",
        help="Normalize, watermark and bundle page images into a PDF",
        description="Discover page images, order them by the page number in their filenames, normalize and optionally watermark each one, and bundle them into a single PDF.",
    )
    _add_source_arguments(assemble_parser)
    assemble_parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output file path for the generated PDF",
    )
    assemble_parser.add_argument(
        "--watermark",
        type=Path,
        default=None,
        help="Watermark image file path (watermarking is off when omitted)",
    )
    assemble_parser.add_argument(
        "--size",
        type=int,
        default=4,
        help="Watermark scale factor; the watermark is page size divided by this (default: 4)",
    )
    assemble_parser.add_argument(
        "--width",
        type=int,
        default=1500,
        help="Output page width in pixels (default: 1500)",
    )
    assemble_parser.add_argument(
        "--height",
        type=int,
        default=1500,
        help="Output page height in pixels (default: 1500)",
    )
    assemble_parser.add_argument(
        "--density",
        type=int,
        default=150,
        help="Output page density in DPI (default: 150)",
    )
    assemble_parser.add_argument(
        "--workdir",
        type=Path,
        default=DEFAULT_WORK_DIR,
        help=f"Work directory for temporary files (default: {DEFAULT_WORK_DIR})",
    )
    assemble_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum number of pages transformed at once (default: thread pool default)",
    )
    assemble_parser.add_argument(
        "--assembler",
        choices=sorted(ASSEMBLERS),
        default=DEFAULT_ASSEMBLER,
        help=f"PDF assembly backend (default: {DEFAULT_ASSEMBLER})",
    )
    assemble_parser.add_argument(
        "--convert-binary",
        default="convert",
        help="ImageMagick executable used to normalize pages (default: convert)",
    )
    assemble_parser.add_argument(
        "--magick-binary",
        default="magick",
        help="ImageMagick executable used to composite watermarks (default: magick)",
    )
    assemble_parser.set_defaults(func=assemble)

    list_parser = subparsers.add_parser(
        "list-pages",
        help="Show discovered pages in document order",
        description="Discover and index page images and print them in the order they would be bundled.",
    )
    _add_source_arguments(list_parser)
    list_parser.set_defaults(func=list_pages)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
