"""Run configuration schema.

A RunConfig is built once per run (by the CLI or a caller) and passed into
every pipeline component. It is frozen; no component mutates it.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_EXTENSIONS = (".jpg", ".jpeg")
DEFAULT_WORK_DIR = Path(".scan-assembler-workdir")


class RunConfig(BaseModel):
    """Read-only settings for a single assembly run.

    Attributes:
        search_root: Directory scanned recursively for page images
        output_path: Where the assembled document is written
        extensions: Accepted file extensions (case-sensitive, with leading dot)
        watermark_path: Watermark image; watermarking is skipped when unset
        watermark_scale: Page dimension divisor for the watermark size
        page_width: Target page width in pixels
        page_height: Target page height in pixels
        density: Resolution density (DPI) of normalized pages
        watermark_offset: Watermark placement from the top-left corner
        work_dir: Scratch directory for per-page artifacts
        max_workers: Concurrency ceiling for page transforms (None for the
            thread pool default)
    """

    search_root: Path
    output_path: Path
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    watermark_path: Path | None = None
    watermark_scale: int = Field(default=4, ge=1)
    page_width: int = Field(default=1500, gt=0)
    page_height: int = Field(default=1500, gt=0)
    density: int = Field(default=150, gt=0)
    watermark_offset: tuple[int, int] = (25, 25)
    work_dir: Path = DEFAULT_WORK_DIR
    max_workers: int | None = Field(default=None, ge=1)

    model_config = {"frozen": True}

    @field_validator("extensions")
    @classmethod
    def _check_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one extension is required")
        for ext in value:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"extension must start with '.': {ext!r}")
        return value

    @property
    def watermark_enabled(self) -> bool:
        return self.watermark_path is not None
