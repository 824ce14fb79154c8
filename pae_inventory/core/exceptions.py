"""
Domain exceptions for the PAE inventory service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PAEInventoryError(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Purchases backend exceptions
class PurchasesAPIError(PAEInventoryError):
    """The purchases backend answered with an unexpected status."""

    def __init__(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
        code: str = "PURCHASES_API_ERROR",
    ):
        super().__init__(
            f"Purchases API error during {operation}: {reason}",
            code=code,
            details={
                "operation": operation,
                "reason": reason,
                "status_code": status_code,
            },
        )
        self.status_code = status_code


class PurchasesAPIUnavailableError(PurchasesAPIError):
    """The purchases backend could not be reached after all retries."""

    def __init__(self, operation: str, reason: str, attempts: int = 1):
        super().__init__(
            operation,
            reason,
            code="PURCHASES_API_UNAVAILABLE",
        )
        self.details["attempts"] = attempts


class PurchasesAuthError(PurchasesAPIError):
    """The purchases backend rejected the bearer token."""

    def __init__(self, operation: str, status_code: int):
        super().__init__(
            operation,
            "authentication rejected",
            status_code=status_code,
            code="PURCHASES_AUTH_FAILED",
        )


# Inventory exceptions
class InventoryError(PAEInventoryError):
    """Base exception for inventory operations."""

    pass


class InsufficientStockError(InventoryError):
    """Requested quantity exceeds the reconstructed available stock."""

    def __init__(
        self,
        product_id: str,
        requested: float,
        available: float,
        unit: str | None = None,
        storage_location: str | None = None,
    ):
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
                "unit": unit,
                "storage_location": storage_location,
            },
        )


class InventoryBatchNotFoundError(InventoryError):
    """No batch with available stock carries the given inventory id."""

    def __init__(self, product_id: str, inventory_id: str):
        super().__init__(
            f"Inventory batch not found: {inventory_id}",
            code="INVENTORY_BATCH_NOT_FOUND",
            details={"product_id": product_id, "inventory_id": inventory_id},
        )


# Validation Exceptions
class ValidationError(PAEInventoryError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(PAEInventoryError):
    """Configuration error."""

    pass
