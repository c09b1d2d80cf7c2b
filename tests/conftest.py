"""
Pytest configuration and fixtures for compressapi tests.
"""
import gzip
from typing import Any, Dict, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from fastapi.testclient import TestClient
from starlette.requests import Request

from compressapi import CompressionMiddleware, InMemoryBackend

LONG_TEXT = "The quick brown fox jumps over the lazy dog. " * 100
SHORT_TEXT = "hello world"
JSON_PAYLOAD = {"items": [{"id": i, "name": f"item-{i}", "active": i % 2 == 0} for i in range(100)]}
EVENTS = [f"data: event number {i}\n\n" for i in range(5)]
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 8
CSV_ROWS = ["id,name,active\n"] + [f"{i},item-{i},{i % 2 == 0}\n" for i in range(200)]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingCompressor:
    """Wraps a compressor and records every call."""

    def __init__(self, compressor=None):
        from compressapi.compression import codecs

        self.compressor = compressor or codecs.compress
        self.calls: List[str] = []

    def __call__(self, encoding, data, options):
        self.calls.append(encoding)
        return self.compressor(encoding, data, options)


def make_request(headers: Optional[Dict[str, str]] = None, path: str = "/", method: str = "GET") -> Request:
    """Build a bare Starlette request carrying the given headers."""
    raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    return Request({
        "type": "http",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": raw,
    })


async def event_source(events=EVENTS):
    for event in events:
        yield event


async def csv_rows(rows=CSV_ROWS):
    for row in rows:
        yield row


def build_app(cache: Optional[InMemoryBackend] = None, **options: Any) -> FastAPI:
    """FastAPI app with the compression middleware and a route per scenario."""
    app = FastAPI()
    app.add_middleware(CompressionMiddleware, cache=cache, **options)

    @app.get("/text")
    async def text():
        return PlainTextResponse(LONG_TEXT)

    @app.get("/short")
    async def short():
        return PlainTextResponse(SHORT_TEXT)

    @app.get("/json")
    async def json_route():
        return JSONResponse(JSON_PAYLOAD)

    @app.get("/image")
    async def image():
        return Response(content=PNG_BYTES, media_type="image/png")

    @app.get("/untyped")
    async def untyped():
        return Response(content=LONG_TEXT.encode())

    @app.get("/redirect")
    async def redirect():
        return PlainTextResponse(LONG_TEXT, status_code=302, headers={"Location": "/not-found"})

    @app.get("/error")
    async def error():
        return PlainTextResponse(LONG_TEXT, status_code=500)

    @app.get("/cookie")
    async def cookie():
        response = PlainTextResponse(LONG_TEXT, headers={"x-powered-by": "compressapi"})
        response.set_cookie("test", "test")
        response.set_cookie("other", "value")
        return response

    @app.get("/vary")
    async def vary():
        return PlainTextResponse(LONG_TEXT, headers={"Vary": "location, header"})

    @app.get("/vary-star")
    async def vary_star():
        return PlainTextResponse(LONG_TEXT, headers={"Vary": "*"})

    @app.get("/encoded")
    async def encoded():
        return Response(
            content=gzip.compress(LONG_TEXT.encode()),
            media_type="text/plain",
            headers={"Content-Encoding": "gzip"},
        )

    @app.api_route("/events", methods=["GET", "HEAD"])
    async def events():
        return StreamingResponse(event_source(), media_type="text/event-stream")

    @app.get("/csv")
    async def csv():
        return StreamingResponse(csv_rows(), media_type="text/csv")

    @app.delete("/items/{item_id}", status_code=204)
    async def delete_item(item_id: int):
        return Response(status_code=204)

    return app


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> InMemoryBackend:
    """A fresh cache per test, driven by the fake clock."""
    return InMemoryBackend(clock=clock)


@pytest.fixture
def client(cache) -> TestClient:
    """Client for an app using default compression settings."""
    return TestClient(build_app(cache=cache))


@pytest.fixture
def stream_client(cache) -> TestClient:
    """Client for an app that compresses streamed responses."""
    return TestClient(build_app(cache=cache, compress_stream=True))
