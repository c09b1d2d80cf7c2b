"""
Core helpers shared by the compressapi app factory and CLI.
"""
import logging
from typing import Union

from .config import Settings, settings


def setup_logging(level: Union[int, str] = "INFO") -> None:
    """Configure root logging for compressapi processes."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("compressapi").setLevel(level)


__all__ = ["Settings", "settings", "setup_logging"]
