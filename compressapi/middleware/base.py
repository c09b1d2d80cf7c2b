# middleware/base.py
"""Base middleware classes for compressapi."""
from abc import ABC
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class CompressAPIMiddleware(BaseHTTPMiddleware, ABC):
    """Base class for compressapi middlewares with request/response hooks."""

    def __init__(self, app, **kwargs):
        super().__init__(app)
        self.config = kwargs
        self.setup()

    def setup(self) -> None:
        """Override this method for middleware-specific setup."""
        pass

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Main middleware dispatch method."""
        await self.before_request(request)

        try:
            response = await call_next(request)
            return await self.after_response(request, response)
        except Exception as e:
            return await self.handle_exception(request, e)

    async def before_request(self, request: Request) -> None:
        """Called before the request is processed."""
        pass

    async def after_response(self, request: Request, response: Response) -> Response:
        """Called after the response is generated."""
        return response

    async def handle_exception(self, request: Request, exc: Exception) -> Response:
        """Handle exceptions that occur during request processing."""
        raise exc
