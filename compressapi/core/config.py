"""
Configuration settings for compressapi.
"""
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from ..config import CompressionConfig


class Settings(BaseSettings):
    """
    Centralized application settings.
    Every setting can be overridden by a `COMPRESSAPI_`-prefixed environment variable.
    """
    # --- Application ---
    APP_NAME: str = "compressapi"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Server ---
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # --- Compression ---
    COMPRESSION_ENCODINGS: str = "br,gzip,deflate"  # priority order, comma-separated
    COMPRESSION_THRESHOLD: int = 1024
    COMPRESSION_DISABLE_BY_HEADER: bool = True
    COMPRESSION_CACHE_TTL: int = 24 * 60 * 60
    COMPRESSION_CACHE_MAX_SIZE: Optional[int] = None
    COMPRESSION_STREAM: bool = False

    # --- Algorithm tuning ---
    BROTLI_QUALITY: int = 11
    ZLIB_LEVEL: int = 6

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v):
        return v.upper()

    @property
    def encodings(self) -> List[str]:
        return [token.strip() for token in self.COMPRESSION_ENCODINGS.split(",") if token.strip()]

    def compression_config(self) -> CompressionConfig:
        """Build the middleware configuration described by these settings."""
        return CompressionConfig.create(
            encodings=self.encodings,
            threshold=self.COMPRESSION_THRESHOLD,
            disable_by_header=self.COMPRESSION_DISABLE_BY_HEADER,
            cache_ttl=self.COMPRESSION_CACHE_TTL,
            cache_max_size=self.COMPRESSION_CACHE_MAX_SIZE,
            compress_stream=self.COMPRESSION_STREAM,
            brotli_options={"quality": self.BROTLI_QUALITY},
            zlib_options={"level": self.ZLIB_LEVEL},
        )

    class Config:
        env_file = ".env"
        env_prefix = "COMPRESSAPI_"
        case_sensitive = True


# Global settings instance
settings = Settings()
