"""Custom exceptions for the assembly pipeline."""

from pathlib import Path


class ScanAssemblerError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class DiscoveryError(ScanAssemblerError):
    """Raised when walking the search root fails."""

    def __init__(self, message: str, path: Path | None = None, *args, **kwargs):
        self.path = path
        super().__init__(message, *args, **kwargs)


class IndexingError(ScanAssemblerError):
    """Raised when a filename yields no usable page number."""

    def __init__(self, message: str, filename: str, *args, **kwargs):
        self.filename = filename
        super().__init__(message, *args, **kwargs)


class ExternalToolError(ScanAssemblerError):
    """Raised when an out-of-process tool fails or cannot be started."""

    def __init__(
        self,
        message: str,
        command: list[str],
        returncode: int | None = None,
        output: str = "",
        *args,
        **kwargs,
    ):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(message, *args, **kwargs)


class TransformError(ScanAssemblerError):
    """Raised when normalizing or watermarking a single page fails."""

    def __init__(self, message: str, source_path: Path, output: str = "", *args, **kwargs):
        self.source_path = source_path
        self.output = output
        super().__init__(message, *args, **kwargs)


class BundlingError(ScanAssemblerError):
    """Raised when the ordered page set cannot be assembled."""

    def __init__(self, message: str, missing: list[Path] | None = None, *args, **kwargs):
        self.missing = missing or []
        super().__init__(message, *args, **kwargs)


class WorkDirectoryError(ScanAssemblerError):
    """Raised when the scratch directory for artifacts cannot be prepared."""

    def __init__(self, message: str, path: Path, *args, **kwargs):
        self.path = path
        super().__init__(message, *args, **kwargs)
