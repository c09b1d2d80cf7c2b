"""
Byte-level codecs for the `br`, `gzip` and `deflate` encodings.

`compress` handles whole buffers. `create_stream_encoder` and `wrap_stream` handle
chunked bodies: every input chunk is flushed on its own, so a client can decode each
compressed chunk as soon as it arrives.
"""
import logging
import zlib
from contextlib import contextmanager
from typing import AsyncIterable, AsyncIterator, Dict, Union

import brotli

from ..config import BrotliMode, BrotliOptions, ZlibOptions
from ..exceptions import CompressionError, UnsupportedEncodingError

logger = logging.getLogger("compressapi.compression")

TuningOptions = Union[BrotliOptions, ZlibOptions]

# gzip wraps deflate data in a gzip header, deflate in HTTP means the zlib format
_ZLIB_WBITS: Dict[str, int] = {
    "gzip": 16 + zlib.MAX_WBITS,
    "deflate": zlib.MAX_WBITS,
}

_BROTLI_MODES = {
    BrotliMode.GENERIC: brotli.MODE_GENERIC,
    BrotliMode.TEXT: brotli.MODE_TEXT,
    BrotliMode.FONT: brotli.MODE_FONT,
}


@contextmanager
def _translate_errors(encoding: str):
    try:
        yield
    except (zlib.error, brotli.error) as e:
        raise CompressionError(encoding, str(e)) from e


def _brotli_kwargs(options: BrotliOptions) -> dict:
    return {
        "mode": _BROTLI_MODES[options.mode],
        "quality": options.quality,
        "lgwin": options.lgwin,
        "lgblock": options.lgblock,
    }


def _zlib_compressobj(encoding: str, options: ZlibOptions):
    return zlib.compressobj(
        options.level,
        zlib.DEFLATED,
        _ZLIB_WBITS[encoding],
        options.mem_level,
        options.strategy.constant,
    )


def _check_encoding(encoding: str) -> None:
    if encoding != "br" and encoding not in _ZLIB_WBITS:
        raise UnsupportedEncodingError(encoding)


def compress(encoding: str, data: bytes, options: TuningOptions) -> bytes:
    """Compress a complete buffer with the given encoding and tuning options."""
    _check_encoding(encoding)
    with _translate_errors(encoding):
        if encoding == "br":
            return brotli.compress(bytes(data), **_brotli_kwargs(options))
        compressor = _zlib_compressobj(encoding, options)
        return compressor.compress(data) + compressor.flush()


class StreamEncoder:
    """Incremental encoder. Output of each `compress` call is independently decodable."""

    encoding: str

    def compress(self, chunk: bytes) -> bytes:
        raise NotImplementedError

    def finish(self) -> bytes:
        raise NotImplementedError


class ZlibStreamEncoder(StreamEncoder):
    def __init__(self, encoding: str, options: ZlibOptions):
        self.encoding = encoding
        self._compressor = _zlib_compressobj(encoding, options)

    def compress(self, chunk: bytes) -> bytes:
        with _translate_errors(self.encoding):
            return self._compressor.compress(chunk) + self._compressor.flush(zlib.Z_SYNC_FLUSH)

    def finish(self) -> bytes:
        with _translate_errors(self.encoding):
            return self._compressor.flush(zlib.Z_FINISH)


class BrotliStreamEncoder(StreamEncoder):
    encoding = "br"

    def __init__(self, options: BrotliOptions):
        self._compressor = brotli.Compressor(**_brotli_kwargs(options))

    def compress(self, chunk: bytes) -> bytes:
        with _translate_errors(self.encoding):
            return self._compressor.process(chunk) + self._compressor.flush()

    def finish(self) -> bytes:
        with _translate_errors(self.encoding):
            return self._compressor.finish()


def create_stream_encoder(encoding: str, options: TuningOptions) -> StreamEncoder:
    _check_encoding(encoding)
    if encoding == "br":
        return BrotliStreamEncoder(options)
    return ZlibStreamEncoder(encoding, options)


async def wrap_stream(
    encoding: str,
    chunks: AsyncIterable[Union[bytes, str]],
    options: TuningOptions,
    charset: str = "utf-8",
) -> AsyncIterator[bytes]:
    """
    Compress an async chunk source on the fly.

    Chunks are pulled one at a time, so the consumer's pace is the producer's pace.
    Errors raised by the source propagate to the consumer unchanged. The encoder
    trailer is emitted once the source is exhausted.
    """
    encoder = create_stream_encoder(encoding, options)
    async for chunk in chunks:
        if isinstance(chunk, str):
            chunk = chunk.encode(charset)
        if not chunk:
            continue
        compressed = encoder.compress(chunk)
        if compressed:
            yield compressed
    trailer = encoder.finish()
    if trailer:
        yield trailer
