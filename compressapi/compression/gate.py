"""Rules deciding whether a response should be compressed at all."""
import logging
import re
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from ..config import DEFAULT_COMPRESSIBLE_TYPES, CompressionConfig

logger = logging.getLogger("compressapi.compression")

OPT_OUT_HEADER = "x-no-compression"

# statuses that never carry a body
BODYLESS_STATUSES = frozenset({204, 205})


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_event_stream(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == "text/event-stream"


def is_compressible_type(content_type: Optional[str], pattern: re.Pattern = DEFAULT_COMPRESSIBLE_TYPES) -> bool:
    """Classify a `Content-Type` value. A missing or empty type counts as text/plain."""
    if not content_type:
        return True
    return pattern.search(content_type) is not None


class CompressibilityGate:
    """
    Evaluates the skip rules in a fixed order.

    Each check returns a short reason when compression must be skipped and None when
    the response may proceed. Skips are ordinary outcomes, never errors.
    """

    def __init__(self, config: CompressionConfig):
        self.config = config

    def check_response(self, request: Request, response: Response) -> Optional[str]:
        """Rules that only need the request and response metadata."""
        if self.config.disable_by_header and request.headers.get(OPT_OUT_HEADER):
            return f"{OPT_OUT_HEADER} header present"
        if not is_success(response.status_code):
            return f"status {response.status_code} is not successful"
        if response.status_code in BODYLESS_STATUSES or request.method == "HEAD":
            return "response has no body"
        if response.headers.get("content-encoding"):
            return "response is already encoded"
        return None

    def check_body(self, body: bytes, content_type: Optional[str]) -> Optional[str]:
        """Rules for buffered bodies: size threshold, then content type."""
        if len(body) < self.config.threshold:
            return f"body size {len(body)} below threshold {self.config.threshold}"
        if not is_compressible_type(content_type, self.config.compressible_types):
            return f"content type {content_type!r} is not compressible"
        return None
