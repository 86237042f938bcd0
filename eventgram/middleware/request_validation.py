"""Request validation middleware."""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from eventgram.config import settings
from eventgram.exceptions import RequestTooLargeError
from eventgram.handlers.exception_handler import create_error_response


class RequestSizeValidationMiddleware(BaseHTTPMiddleware):
    """
    Middleware to validate request size before processing.

    Rejects oversized requests (mostly image uploads) before any route
    handles them. Returns 413 Payload Too Large.
    """

    def __init__(self, app, max_size: int | None = None) -> None:
        super().__init__(app)
        self.max_size = max_size or settings.max_request_size_bytes

    def _too_large(self, request: Request, size: int) -> Response:
        size_kb = size / 1024
        max_kb = self.max_size / 1024
        exc = RequestTooLargeError(
            message=f"Request size {size_kb:.1f}KB exceeds maximum {max_kb:.0f}KB",
            max_size=f"{max_kb:.0f}KB",
            details={"request_size": f"{size_kb:.1f}KB"},
        )
        # Raised errors here would bypass the app's exception handlers
        return create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            correlation_id=getattr(request.state, "correlation_id", None),
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Validate request size and process request.

        A declared Content-Length is checked without reading the body.
        Chunked uploads carry no length, so their body is read here and
        measured; the route then receives the already-read body.

        Args:
            request: The incoming request
            call_next: The next middleware/handler in the chain

        Returns:
            The response from the handler, or a 413 error response
        """
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit():
            size = int(content_length)
            if size > self.max_size:
                return self._too_large(request, size)
        elif request.method in ("POST", "PUT", "PATCH"):
            size = len(await request.body())
            if size > self.max_size:
                return self._too_large(request, size)

        return await call_next(request)
