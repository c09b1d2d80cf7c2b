"""
compressapi middleware system.

Provides the compression middleware and a manager for registering it on apps.
"""
from typing import Any, Dict, List, Literal, Union
from fastapi import FastAPI
import logging as log

from ..config import CompressionConfig
from .base import CompressAPIMiddleware
from .compression import CompressionMiddleware

logger = log.getLogger("compressapi.middleware")


class MiddlewareManager:
    """Manages middleware registration and configuration for compressapi apps."""

    def __init__(self):
        self.middlewares: List[Dict[str, Any]] = []
        self._builtin_middlewares = {
            'compression': CompressionMiddleware,
        }

    def add_middleware(
        self,
        middleware_class: Union[str, type],
        as_: Literal['before', 'after'] = 'after',
        **options
    ) -> 'MiddlewareManager':
        """
        Add middleware to the stack.

        Entries registered with ``as_='before'`` go to the front of the stack and
        wrap everything else; ``'after'`` entries sit closest to the route handler.
        """
        if isinstance(middleware_class, str):
            if middleware_class not in self._builtin_middlewares:
                raise ValueError(f"Unknown middleware: {middleware_class}")
            middleware_class = self._builtin_middlewares[middleware_class]
        if as_ not in ('before', 'after'):
            raise ValueError(f"as_ must be 'before' or 'after', got {as_!r}")

        entry = {
            'class': middleware_class,
            'options': options
        }
        if as_ == 'before':
            self.middlewares.insert(0, entry)
        else:
            self.middlewares.append(entry)
        return self

    def configure_compression(
        self,
        enabled: bool = True,
        as_: Literal['before', 'after'] = 'after',
        **kwargs
    ) -> 'MiddlewareManager':
        """
        Configure compression middleware.

        Options are validated here so configuration errors surface at startup
        instead of on the first request.
        """
        if enabled:
            cache = kwargs.pop('cache', None)
            compression_config = kwargs.pop('compression_config', None) or CompressionConfig.create(**kwargs)
            options = {'compression_config': compression_config}
            if cache is not None:
                options['cache'] = cache
            return self.add_middleware('compression', as_=as_, **options)
        return self

    def apply_to_app(self, app: FastAPI) -> None:
        """Apply all configured middlewares to the FastAPI app."""
        # Apply middlewares in reverse order (LIFO stack)
        for middleware_config in reversed(self.middlewares):
            middleware_class = middleware_config['class']
            options = middleware_config['options']

            try:
                app.add_middleware(middleware_class, **options)
                logger.info(f"Added middleware: {middleware_class.__name__}")
            except Exception as e:
                logger.error(f"Failed to add middleware {middleware_class.__name__}: {e}")
                raise


__all__ = [
    'CompressAPIMiddleware',
    'CompressionMiddleware',
    'MiddlewareManager',
]
