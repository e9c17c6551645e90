"""API middleware."""

from billwise.api.middleware.error_handler import ErrorHandlerMiddleware
from billwise.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
