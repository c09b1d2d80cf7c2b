"""Incremental compression for streamed bodies such as server-sent events."""
import logging
from typing import AsyncIterable, AsyncIterator, Union

from ..config import CompressionConfig
from . import codecs

logger = logging.getLogger("compressapi.compression")


class StreamingCompressor:
    """Wraps chunk sources with an encoder. Streams never touch the result cache."""

    def __init__(self, config: CompressionConfig):
        self.config = config

    def wrap(
        self,
        encoding: str,
        chunks: AsyncIterable[Union[bytes, str]],
        charset: str = "utf-8",
    ) -> AsyncIterator[bytes]:
        logger.debug(f"Compressing stream with {encoding}")
        return codecs.wrap_stream(encoding, chunks, self.config.options_for(encoding), charset=charset)
