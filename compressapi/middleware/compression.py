# middleware/compression.py
"""Compression middleware for compressapi."""
import logging

from starlette.requests import Request
from starlette.responses import Response

from ..compression import CompressionPipeline
from ..config import CompressionConfig
from ..exceptions import ConfigurationError
from .base import CompressAPIMiddleware

logger = logging.getLogger("compressapi.middleware")


class CompressionMiddleware(CompressAPIMiddleware):
    """
    Negotiated br/gzip/deflate compression with a result cache.

    Accepts either a ready `compression_config` or the individual
    `CompressionConfig` fields as keyword arguments, plus an optional `cache`
    backend. Without one, every middleware instance gets its own in-memory cache.
    """

    def setup(self):
        options = dict(self.config)
        compression_config = options.pop('compression_config', None)
        cache = options.pop('cache', None)

        if compression_config is None:
            compression_config = CompressionConfig.create(**options)
        elif options:
            raise ConfigurationError(
                f"Pass either compression_config or individual options, got both: {sorted(options)}"
            )

        self.compression_config = compression_config
        self.pipeline = CompressionPipeline(compression_config, cache=cache)
        logger.debug(f"Compression middleware configured: {compression_config.summary()}")

    @property
    def cache(self):
        return self.pipeline.cache

    async def after_response(self, request: Request, response: Response) -> Response:
        """Compress response if applicable."""
        return await self.pipeline.process(request, response)
