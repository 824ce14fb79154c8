"""API middleware."""

from pae_inventory.api.middleware.error_handler import ErrorHandlerMiddleware
from pae_inventory.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
