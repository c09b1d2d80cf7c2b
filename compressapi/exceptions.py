"""Exception types raised by compressapi."""
from typing import Optional


class CompressAPIError(Exception):
    """Base class for all compressapi errors."""


class ConfigurationError(CompressAPIError, ValueError):
    """Raised when compression settings are invalid.

    Surfaces at middleware construction time, so a misconfigured app fails on startup
    rather than on the first request.
    """


class UnsupportedEncodingError(CompressAPIError, ValueError):
    """Raised when a codec is requested for an unknown encoding token."""

    def __init__(self, encoding: str):
        self.encoding = encoding
        super().__init__(f"Unsupported content encoding: {encoding!r}")


class CompressionError(CompressAPIError):
    """Raised when the underlying algorithm rejects its input."""

    def __init__(self, encoding: str, message: Optional[str] = None):
        self.encoding = encoding
        super().__init__(f"{encoding} compression failed: {message or 'unknown error'}")
