"""
Compression configuration for compressapi.

`CompressionConfig` is built once when the middleware is constructed and shared,
read-only, by every request afterwards. Algorithm tuning lives in typed option
models (`BrotliOptions`, `ZlibOptions`) that are handed to the codecs unchanged.
"""
import re
import zlib
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

Encoding = Literal["br", "gzip", "deflate"]

SUPPORTED_ENCODINGS: Tuple[str, ...] = ("br", "gzip", "deflate")

# text/* except event streams, and anything ending in json/text/xml or carrying octet-stream
DEFAULT_COMPRESSIBLE_TYPES = re.compile(
    r"^text/(?!event-stream)|(?:\+|/)json(?:;|$)|(?:\+|/)text(?:;|$)|(?:\+|/)xml(?:;|$)|octet-stream(?:;|$)"
)


class BrotliMode(str, Enum):
    """Brotli encoder mode hint."""

    GENERIC = "generic"
    TEXT = "text"
    FONT = "font"


class ZlibStrategy(str, Enum):
    """Deflate strategy, mirrored from the zlib constants."""

    DEFAULT = "default"
    FILTERED = "filtered"
    HUFFMAN_ONLY = "huffman_only"
    RLE = "rle"
    FIXED = "fixed"

    @property
    def constant(self) -> int:
        return {
            ZlibStrategy.DEFAULT: zlib.Z_DEFAULT_STRATEGY,
            ZlibStrategy.FILTERED: zlib.Z_FILTERED,
            ZlibStrategy.HUFFMAN_ONLY: zlib.Z_HUFFMAN_ONLY,
            ZlibStrategy.RLE: zlib.Z_RLE,
            ZlibStrategy.FIXED: zlib.Z_FIXED,
        }[self]


class BrotliOptions(BaseModel):
    """Tuning parameters for the `br` encoding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quality: int = Field(default=11, ge=0, le=11, description="0 (fastest) to 11 (smallest)")
    mode: BrotliMode = BrotliMode.GENERIC
    lgwin: int = Field(default=22, ge=10, le=24, description="Base-2 log of the sliding window size")
    lgblock: int = Field(default=0, description="Base-2 log of the input block size, 0 lets the encoder pick")

    @field_validator("lgblock")
    def validate_lgblock(cls, v: int) -> int:
        if v != 0 and not 16 <= v <= 24:
            raise ValueError("lgblock must be 0 or between 16 and 24")
        return v


class ZlibOptions(BaseModel):
    """Tuning parameters shared by the `gzip` and `deflate` encodings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: int = Field(default=6, ge=-1, le=9, description="-1 is zlib's default level")
    mem_level: int = Field(default=8, ge=1, le=9)
    strategy: ZlibStrategy = ZlibStrategy.DEFAULT


class CompressionConfig(BaseModel):
    """
    Immutable middleware configuration.

    Attributes:
        encodings: Supported encodings in priority order.
        disable_by_header: Skip compression when the request carries `x-no-compression`.
        threshold: Minimum body size in bytes for buffered compression.
        cache_ttl: Seconds a compressed body stays in the result cache.
        cache_max_size: Optional bound on cached entries, None keeps the cache unbounded.
        compress_stream: Compress streamed bodies incrementally. When off, event streams
            pass through and other streams are buffered.
        compressible_types: Classifier applied to the response `Content-Type`.
        brotli_options: Passed through to the brotli codec.
        zlib_options: Passed through to the gzip and deflate codecs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    encodings: Tuple[Encoding, ...] = SUPPORTED_ENCODINGS
    disable_by_header: bool = True
    threshold: int = Field(default=1024, ge=0)
    cache_ttl: int = Field(default=24 * 60 * 60, gt=0)
    cache_max_size: Optional[int] = Field(default=None, gt=0)
    compress_stream: bool = False
    compressible_types: re.Pattern = DEFAULT_COMPRESSIBLE_TYPES
    brotli_options: BrotliOptions = Field(default_factory=BrotliOptions)
    zlib_options: ZlibOptions = Field(default_factory=ZlibOptions)

    @field_validator("encodings")
    def validate_encodings(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("at least one encoding must be configured")
        if len(set(v)) != len(v):
            raise ValueError(f"duplicate encodings in {list(v)}")
        return v

    @classmethod
    def create(cls, **options: Any) -> "CompressionConfig":
        """Build a config, turning validation failures into `ConfigurationError`."""
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid compression configuration: {e}") from e

    def options_for(self, encoding: str) -> BaseModel:
        """Return the tuning model that applies to `encoding`."""
        return self.brotli_options if encoding == "br" else self.zlib_options

    def summary(self) -> Dict[str, Any]:
        return {
            "encodings": list(self.encodings),
            "disable_by_header": self.disable_by_header,
            "threshold": self.threshold,
            "cache_ttl": self.cache_ttl,
            "cache_max_size": self.cache_max_size,
            "compress_stream": self.compress_stream,
            "brotli_quality": self.brotli_options.quality,
            "zlib_level": self.zlib_options.level,
        }


__all__ = [
    "BrotliMode",
    "BrotliOptions",
    "CompressionConfig",
    "DEFAULT_COMPRESSIBLE_TYPES",
    "Encoding",
    "SUPPORTED_ENCODINGS",
    "ZlibOptions",
    "ZlibStrategy",
]
