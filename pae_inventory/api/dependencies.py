"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers.
"""

from pae_inventory.application.services import get_movement_gateway
from pae_inventory.application.use_cases import (
    AdjustInventoryUseCase,
    ConsumeInventoryUseCase,
    GetAvailableStockUseCase,
    GetConsumptionHistoryUseCase,
    GetMovementLogUseCase,
    GetStockSummaryUseCase,
    ReceiveInventoryUseCase,
)
from pae_inventory.config import Settings, get_settings
from pae_inventory.core.interfaces import IInventoryMovementGateway


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_gateway() -> IInventoryMovementGateway:
    """Get the movement gateway."""
    return get_movement_gateway()


# Read use case dependencies
def get_available_stock_use_case() -> GetAvailableStockUseCase:
    """Get available stock use case."""
    return GetAvailableStockUseCase()


def get_movement_log_use_case() -> GetMovementLogUseCase:
    """Get movement log use case."""
    return GetMovementLogUseCase()


def get_stock_summary_use_case() -> GetStockSummaryUseCase:
    """Get stock summary use case."""
    return GetStockSummaryUseCase()


def get_consumption_history_use_case() -> GetConsumptionHistoryUseCase:
    """Get consumption history use case."""
    return GetConsumptionHistoryUseCase()


# Write use case dependencies
def get_receive_inventory_use_case() -> ReceiveInventoryUseCase:
    """Get receive inventory use case."""
    return ReceiveInventoryUseCase()


def get_consume_inventory_use_case() -> ConsumeInventoryUseCase:
    """Get consume inventory use case."""
    return ConsumeInventoryUseCase()


def get_adjust_inventory_use_case() -> AdjustInventoryUseCase:
    """Get adjust inventory use case."""
    return AdjustInventoryUseCase()
