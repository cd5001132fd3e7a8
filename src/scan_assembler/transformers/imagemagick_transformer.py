"""ImageMagick-backed page transformer.

Normalizes pages with ``convert`` and composites watermarks with ``magick``,
each as a separate process. Image dimensions are read with PyMuPDF so the
watermark size can be computed before compositing.
"""

import logging
import subprocess
from pathlib import Path

import fitz  # PyMuPDF

from scan_assembler.exceptions import ExternalToolError

from .transformer import PageTransformer

logger = logging.getLogger(__name__)


class ImageMagickTransformer(PageTransformer):
    """Transform page images by shelling out to ImageMagick.

    Attributes:
        convert_binary: Executable used for normalization
        magick_binary: Executable used for watermark compositing
    """

    def __init__(self, convert_binary: str = "convert", magick_binary: str = "magick") -> None:
        self.convert_binary = convert_binary
        self.magick_binary = magick_binary

    def normalize(
        self,
        source: Path,
        destination: Path,
        width: int,
        height: int,
        density: int,
    ) -> None:
        self._run([
            self.convert_binary,
            str(source),
            "-auto-orient",
            "-resize", f"{width}x{height}",
            "-density", str(density),
            "-strip",
            str(destination),
        ])

    def watermark(
        self,
        page: Path,
        watermark: Path,
        size: tuple[int, int],
        offset: tuple[int, int],
    ) -> None:
        wm_width, wm_height = size
        x, y = offset
        self._run([
            self.magick_binary,
            str(page),
            "-colorspace", "sRGB",
            "(",
            str(watermark),
            "-resize", f"{wm_width}x{wm_height}!",
            ")",
            "-geometry", f"+{x}+{y}",
            "-composite",
            str(page),
        ])

    def measure(self, image: Path) -> tuple[int, int]:
        pix = fitz.Pixmap(str(image))
        return pix.width, pix.height

    def _run(self, command: list[str]) -> None:
        """Run *command*, raising ExternalToolError with its output on failure."""
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise ExternalToolError(
                f"Could not run {command[0]}: {e}", command=command
            ) from e

        if result.returncode != 0:
            output = "\n".join(
                part for part in (result.stdout.strip(), result.stderr.strip()) if part
            )
            raise ExternalToolError(
                f"{command[0]} exited with status {result.returncode}",
                command=command,
                returncode=result.returncode,
                output=output,
            )
