"""The compression decision-and-execution pipeline."""
import logging
from typing import Awaitable, Callable, Optional

from starlette.requests import Request
from starlette.responses import Response

from ..cache import CacheBackend, InMemoryBackend
from ..config import CompressionConfig
from . import codecs
from .buffered import BufferedCompressor, Compressor
from .gate import CompressibilityGate, is_event_stream
from .negotiation import negotiate_encoding
from .responses import clone_response, is_streaming_response, read_body, rewrite_response
from .streaming import StreamingCompressor

logger = logging.getLogger("compressapi.compression")

CallNext = Callable[[Request], Awaitable[Response]]


class CompressionPipeline:
    """
    Runs gate, negotiation, compression and header rewriting for one response.

    The only state shared between requests is the result cache, which the pipeline
    owns. Pass a cache explicitly to share or inspect it.
    """

    def __init__(
        self,
        config: Optional[CompressionConfig] = None,
        cache: Optional[CacheBackend] = None,
        compressor: Compressor = codecs.compress,
    ):
        self.config = config or CompressionConfig()
        self.cache = cache if cache is not None else InMemoryBackend(max_size=self.config.cache_max_size)
        self.gate = CompressibilityGate(self.config)
        self.buffered = BufferedCompressor(self.config, self.cache, compressor=compressor)
        self.streaming = StreamingCompressor(self.config)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        return await self.process(request, response)

    def _skip(self, request: Request, reason: str) -> None:
        logger.debug(f"Not compressing {request.method} {request.url.path}: {reason}")

    async def process(self, request: Request, response: Response) -> Response:
        """Return `response` unchanged or a compressed copy of it."""
        reason = self.gate.check_response(request, response)
        if reason:
            self._skip(request, reason)
            return response

        encoding = negotiate_encoding(request.headers.get("accept-encoding"), self.config.encodings)
        if encoding is None:
            self._skip(request, "no acceptable encoding")
            return response

        if is_streaming_response(response):
            if self.config.compress_stream:
                body = self.streaming.wrap(
                    encoding, response.body_iterator, charset=getattr(response, "charset", "utf-8")
                )
                return rewrite_response(response, encoding, body)
            # event streams may never end, so they cannot be buffered
            if is_event_stream(response.headers.get("content-type")):
                self._skip(request, "stream compression disabled")
                return response

        body = await read_body(response)
        response = clone_response(response, body)

        reason = self.gate.check_body(body, response.headers.get("content-type"))
        if reason:
            self._skip(request, reason)
            return response

        compressed = await self.buffered.compress(encoding, body)
        return rewrite_response(response, encoding, compressed)
