"""Application use cases.

Use cases are the only entry point for API handlers.
"""

from pae_inventory.application.use_cases.adjust_inventory import AdjustInventoryUseCase
from pae_inventory.application.use_cases.consume_inventory import ConsumeInventoryUseCase
from pae_inventory.application.use_cases.get_available_stock import GetAvailableStockUseCase
from pae_inventory.application.use_cases.get_consumption_history import (
    GetConsumptionHistoryUseCase,
)
from pae_inventory.application.use_cases.get_movement_log import (
    GetMovementLogUseCase,
    MovementLogResult,
)
from pae_inventory.application.use_cases.get_stock_summary import GetStockSummaryUseCase
from pae_inventory.application.use_cases.receive_inventory import ReceiveInventoryUseCase

__all__ = [
    "GetAvailableStockUseCase",
    "GetMovementLogUseCase",
    "MovementLogResult",
    "GetStockSummaryUseCase",
    "GetConsumptionHistoryUseCase",
    "ReceiveInventoryUseCase",
    "ConsumeInventoryUseCase",
    "AdjustInventoryUseCase",
]
