"""
compressapi - negotiated response compression for FastAPI and Starlette.

Picks br, gzip or deflate from the client's Accept-Encoding, compresses buffered
bodies through a TTL result cache, compresses streamed bodies incrementally and keeps
Content-Encoding and Vary consistent.
"""

__version__ = "0.1.0"

from .app import create_app
from .cache import InMemoryBackend
from .compression import CompressionPipeline
from .config import BrotliOptions, CompressionConfig, ZlibOptions
from .exceptions import CompressAPIError, CompressionError, ConfigurationError, UnsupportedEncodingError
from .middleware import CompressionMiddleware, MiddlewareManager

__all__ = [
    "BrotliOptions",
    "CompressAPIError",
    "CompressionConfig",
    "CompressionError",
    "CompressionMiddleware",
    "CompressionPipeline",
    "ConfigurationError",
    "InMemoryBackend",
    "MiddlewareManager",
    "UnsupportedEncodingError",
    "ZlibOptions",
    "create_app",
]
