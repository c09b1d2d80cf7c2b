"""
Response helpers: body access, header rewriting and rebuilding compressed responses.
"""
from typing import AsyncIterator, List, Optional, Union

from starlette.datastructures import MutableHeaders
from starlette.responses import Response, StreamingResponse

VARY_TOKEN = "accept-encoding"


def merge_vary(value: Optional[str], token: str = VARY_TOKEN) -> str:
    """
    Add `token` to a `Vary` value.

    Existing tokens are trimmed and lowercased, duplicates are dropped keeping the
    first occurrence, and the new token goes last. A value containing `*` is
    returned unchanged since it already covers every request header.

    >>> merge_vary("location, header")
    'location, header, accept-encoding'
    >>> merge_vary("*")
    '*'
    """
    if not value:
        return token
    tokens = [part.strip().lower() for part in value.split(",")]
    tokens = [t for t in tokens if t]
    if "*" in tokens:
        return value
    merged: List[str] = []
    for t in tokens + [token.lower()]:
        if t not in merged:
            merged.append(t)
    return ", ".join(merged)


class ResponseHeaders(MutableHeaders):
    """
    Mutable response header list.

    Lookups are case-insensitive. Values keep their order and repeated headers
    (such as several `Set-Cookie` lines) survive untouched unless explicitly set.
    `set` replaces every occurrence of a header with one value, `append` adds a line.
    """

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def remove(self, key: str) -> None:
        del self[key]

    def merge_vary(self, token: str = VARY_TOKEN) -> None:
        """Fold every `Vary` line into one merged value that includes `token`."""
        current = self.getlist("vary")
        if not current:
            self.set("vary", token)
            return
        joined = ", ".join(current)
        merged = merge_vary(joined, token)
        if merged != joined:
            self.set("vary", merged)


def is_streaming_response(response: Response) -> bool:
    """A body iterator without a declared length is treated as an open-ended stream."""
    return hasattr(response, "body_iterator") and "content-length" not in response.headers


async def read_body(response: Response) -> bytes:
    """Materialize a response body. Iterator-backed bodies can only be read once."""
    if not hasattr(response, "body_iterator"):
        return bytes(response.body)
    charset = getattr(response, "charset", "utf-8")
    chunks = []
    async for chunk in response.body_iterator:
        if isinstance(chunk, str):
            chunk = chunk.encode(charset)
        chunks.append(bytes(chunk))
    return b"".join(chunks)


def _build(
    response: Response,
    content: Union[bytes, AsyncIterator[bytes]],
    raw_headers: list,
) -> Response:
    background = getattr(response, "background", None)
    if isinstance(content, bytes):
        new_response = Response(content=content, status_code=response.status_code, background=background)
    else:
        new_response = StreamingResponse(content=content, status_code=response.status_code, background=background)
    new_response.raw_headers = raw_headers
    return new_response


def clone_response(response: Response, body: bytes) -> Response:
    """
    Rebuild a response around an already-read body.

    Plain responses hold their body as bytes and are returned as they are.
    """
    if not hasattr(response, "body_iterator"):
        return response
    return _build(response, body, list(response.raw_headers))


def rewrite_response(
    response: Response,
    encoding: str,
    content: Union[bytes, AsyncIterator[bytes]],
) -> Response:
    """
    Build the compressed response.

    Status and all unrelated headers are carried over. `Content-Encoding` is set to
    the chosen token, `Vary` gains `accept-encoding` and `Content-Length` follows
    the compressed size (or is dropped for streams).
    """
    headers = ResponseHeaders(raw=list(response.raw_headers))
    headers.set("content-encoding", encoding)
    headers.merge_vary()
    if isinstance(content, bytes):
        headers.set("content-length", str(len(content)))
    else:
        headers.remove("content-length")
    return _build(response, content, headers.raw)
