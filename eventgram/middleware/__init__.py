"""Middleware components for request processing."""

from eventgram.middleware.logging import LoggingMiddleware
from eventgram.middleware.request_validation import RequestSizeValidationMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestSizeValidationMiddleware",
]
