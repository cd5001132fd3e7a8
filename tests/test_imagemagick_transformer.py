"""Tests for the ImageMagick page transformer."""

import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from scan_assembler.exceptions import ExternalToolError
from scan_assembler.transformers import ImageMagickTransformer, PageTransformer


def _completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestImageMagickTransformerInit:
    def test_defaults(self):
        transformer = ImageMagickTransformer()

        assert isinstance(transformer, PageTransformer)
        assert transformer.convert_binary == "convert"
        assert transformer.magick_binary == "magick"


class TestNormalize:
    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_builds_convert_command(self, mock_run):
        """normalize() resizes, sets density, auto-orients and strips."""
        mock_run.return_value = _completed()

        ImageMagickTransformer().normalize(
            Path("in/p1.jpg"), Path("work/tmp.jpg"), width=1500, height=1400, density=150
        )

        command = mock_run.call_args.args[0]
        assert command == [
            "convert", "in/p1.jpg",
            "-auto-orient",
            "-resize", "1500x1400",
            "-density", "150",
            "-strip",
            "work/tmp.jpg",
        ]
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["check"] is False
        assert mock_run.call_args.kwargs["errors"] == "replace"

    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_undecodable_warning_on_success_is_not_a_failure(self, mock_run):
        """Output with replaced non-UTF-8 bytes does not fail a zero exit."""
        mock_run.return_value = _completed(
            stderr=b"convert: warning caf\xe9.jpg".decode("utf-8", errors="replace")
        )

        ImageMagickTransformer().normalize(
            Path("caf.jpg"), Path("b.jpg"), width=10, height=10, density=72
        )

        assert mock_run.call_args.kwargs["text"] is True
        assert mock_run.call_args.kwargs["errors"] == "replace"

    @pytest.mark.skipif(shutil.which("echo") is None, reason="echo not available")
    def test_non_utf8_tool_output_is_tolerated(self, tmp_path):
        """A tool echoing a non-UTF-8 filename with exit 0 still succeeds."""
        source = Path(os.fsdecode(b"caf\xe9.jpg"))

        ImageMagickTransformer(convert_binary="echo").normalize(
            source, tmp_path / "out.jpg", width=10, height=10, density=72
        )

    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_custom_binary(self, mock_run):
        mock_run.return_value = _completed()

        ImageMagickTransformer(convert_binary="/opt/im/convert").normalize(
            Path("a.jpg"), Path("b.jpg"), width=10, height=10, density=72
        )

        assert mock_run.call_args.args[0][0] == "/opt/im/convert"

    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_failure_raises_with_output(self, mock_run):
        """A non-zero exit carries the tool's diagnostic output."""
        mock_run.return_value = _completed(
            returncode=1, stdout="", stderr="convert: improper image header"
        )

        with pytest.raises(ExternalToolError) as exc_info:
            ImageMagickTransformer().normalize(
                Path("a.jpg"), Path("b.jpg"), width=10, height=10, density=72
            )

        error = exc_info.value
        assert error.returncode == 1
        assert error.output == "convert: improper image header"
        assert error.command[0] == "convert"

    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_missing_binary_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError("No such file or directory: 'convert'")

        with pytest.raises(ExternalToolError, match="Could not run convert"):
            ImageMagickTransformer().normalize(
                Path("a.jpg"), Path("b.jpg"), width=10, height=10, density=72
            )


class TestWatermark:
    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_builds_composite_command(self, mock_run):
        """watermark() resizes the mark exactly and composites it at the offset."""
        mock_run.return_value = _completed()

        ImageMagickTransformer().watermark(
            Path("work/tmp.jpg"), Path("mark.png"), size=(375, 350), offset=(25, 25)
        )

        assert mock_run.call_args.args[0] == [
            "magick", "work/tmp.jpg",
            "-colorspace", "sRGB",
            "(", "mark.png", "-resize", "375x350!", ")",
            "-geometry", "+25+25",
            "-composite",
            "work/tmp.jpg",
        ]

    @patch("scan_assembler.transformers.imagemagick_transformer.subprocess.run")
    def test_failure_raises(self, mock_run):
        mock_run.return_value = _completed(returncode=1, stderr="magick: no such file")

        with pytest.raises(ExternalToolError) as exc_info:
            ImageMagickTransformer().watermark(
                Path("p.jpg"), Path("mark.png"), size=(1, 1), offset=(25, 25)
            )

        assert "no such file" in exc_info.value.output


class TestMeasure:
    def test_reads_pixel_dimensions(self, tmp_path, jpeg_factory):
        image = jpeg_factory(tmp_path / "p.jpg", width=321, height=123)

        assert ImageMagickTransformer().measure(image) == (321, 123)
