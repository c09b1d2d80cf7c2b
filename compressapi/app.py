"""Application factory for compressapi."""
import logging
from typing import Any, Optional

from fastapi import FastAPI

from .core import setup_logging
from .core.config import Settings, settings as default_settings
from .middleware import MiddlewareManager

logger = logging.getLogger("compressapi")


def create_app(settings: Optional[Settings] = None, **compression_options: Any) -> FastAPI:
    """
    Create a FastAPI app with response compression installed.

    Keyword arguments override the compression settings taken from `settings`.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    if 'compression_config' not in compression_options:
        base = settings.compression_config().model_dump()
        base.update(compression_options)
        compression_options = base

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

    manager = MiddlewareManager()
    manager.configure_compression(**compression_options)
    manager.apply_to_app(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    logger.info(f"{settings.APP_NAME} app created")
    return app
