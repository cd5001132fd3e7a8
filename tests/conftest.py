"""Pytest fixtures for scan-assembler tests."""

import errno
import os
import shutil
import threading
import time
from pathlib import Path

import fitz  # PyMuPDF
import pytest

from schemas.config import RunConfig

from scan_assembler.exceptions import ExternalToolError
from scan_assembler.transformers.transformer import PageTransformer


def make_jpeg(path: Path, width: int = 100, height: int = 100, color=(200, 200, 200)) -> Path:
    """Write a solid-color JPEG of the given size to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.set_rect(pix.irect, color)
    pix.save(str(path))
    return path


class FakeTransformer(PageTransformer):
    """In-process stand-in for the image service.

    normalize() copies the source to the destination; watermark() only
    records its arguments. Source filenames listed in *fail_on* make
    normalize() fail like a crashed external tool. *delays* maps source
    filenames to seconds slept before copying.
    """

    def __init__(self, fail_on=(), fail_watermark_on=(), delays=None):
        self.fail_on = set(fail_on)
        self.fail_watermark_on = set(fail_watermark_on)
        self.delays = delays or {}
        self.normalize_calls = []
        self.watermark_calls = []
        self._lock = threading.Lock()
        self._sources = {}

    def normalize(self, source, destination, width, height, density):
        with self._lock:
            self.normalize_calls.append((source, destination, width, height, density))
            self._sources[destination] = source
        time.sleep(self.delays.get(source.name, 0))
        if source.name in self.fail_on:
            raise ExternalToolError(
                "convert exited with status 1",
                command=["convert", str(source)],
                returncode=1,
                output=f"convert: corrupt image '{source}'",
            )
        shutil.copyfile(source, destination)

    def watermark(self, page, watermark, size, offset):
        with self._lock:
            self.watermark_calls.append((page, watermark, size, offset))
            source = self._sources.get(page)
        if source is not None and source.name in self.fail_watermark_on:
            raise ExternalToolError(
                "magick exited with status 1",
                command=["magick", str(page)],
                returncode=1,
                output="magick: unable to open watermark",
            )

    def measure(self, image):
        pix = fitz.Pixmap(str(image))
        return pix.width, pix.height


@pytest.fixture
def fake_transformer():
    return FakeTransformer()


@pytest.fixture
def scan_dir(tmp_path: Path) -> Path:
    """Directory with a3.jpg, a1.jpg, a2.jpg of widths 300, 100, 200."""
    root = tmp_path / "scans"
    make_jpeg(root / "a3.jpg", width=300, height=100, color=(255, 0, 0))
    make_jpeg(root / "a1.jpg", width=100, height=100, color=(0, 255, 0))
    make_jpeg(root / "a2.jpg", width=200, height=100, color=(0, 0, 255))
    return root


@pytest.fixture
def watermark_file(tmp_path: Path) -> Path:
    return make_jpeg(tmp_path / "watermark.jpg", width=50, height=50, color=(0, 0, 0))


@pytest.fixture
def run_config(tmp_path: Path, scan_dir: Path) -> RunConfig:
    """Configuration for scan_dir with watermarking off."""
    return RunConfig(
        search_root=scan_dir,
        output_path=tmp_path / "out" / "document.pdf",
        work_dir=tmp_path / "work",
    )


@pytest.fixture
def jpeg_factory():
    """Return the make_jpeg helper."""
    return make_jpeg


@pytest.fixture
def transformer_factory():
    """Return the FakeTransformer class for tests that configure failures."""
    return FakeTransformer


def failing_scandir(unreadable: Path):
    """Return an os.scandir replacement that denies access to *unreadable*."""
    real_scandir = os.scandir

    def scandir(path="."):
        if Path(path) == unreadable:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_scandir(path)

    return scandir


@pytest.fixture
def scandir_factory():
    """Return the failing_scandir helper."""
    return failing_scandir
