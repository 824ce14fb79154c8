"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
"""

from pae_inventory.application.services import (
    get_movement_gateway,
    get_stock_reconstructor,
    reset_services,
)
from pae_inventory.application.use_cases import (
    AdjustInventoryUseCase,
    ConsumeInventoryUseCase,
    GetAvailableStockUseCase,
    GetConsumptionHistoryUseCase,
    GetMovementLogUseCase,
    GetStockSummaryUseCase,
    ReceiveInventoryUseCase,
)

__all__ = [
    # Use Cases
    "GetAvailableStockUseCase",
    "GetMovementLogUseCase",
    "GetConsumptionHistoryUseCase",
    "GetStockSummaryUseCase",
    "ReceiveInventoryUseCase",
    "ConsumeInventoryUseCase",
    "AdjustInventoryUseCase",
    # Service factories
    "get_movement_gateway",
    "get_stock_reconstructor",
    "reset_services",
]
