"""Core domain entities."""

from pae_inventory.core.entities.inventory import (
    DEFAULT_UNIT,
    SYSTEM_REASON,
    UNSPECIFIED_LOCATION,
    InventoryBatch,
    InventoryMovement,
    MovementCounts,
    MovementType,
    StockSnapshot,
    StockSummary,
    normalize_location,
)
from pae_inventory.core.entities.movement_commands import (
    ConsumedBatch,
    InventoryAdjustment,
    InventoryAdjustmentResult,
    InventoryConsumption,
    InventoryConsumptionResult,
    InventoryReceipt,
    InventoryReceiptResult,
)

__all__ = [
    # Movement log entities
    "InventoryMovement",
    "MovementType",
    "MovementCounts",
    "SYSTEM_REASON",
    "DEFAULT_UNIT",
    "UNSPECIFIED_LOCATION",
    "normalize_location",
    # Stock entities
    "InventoryBatch",
    "StockSnapshot",
    "StockSummary",
    # Movement commands
    "InventoryReceipt",
    "InventoryConsumption",
    "InventoryAdjustment",
    "InventoryReceiptResult",
    "InventoryConsumptionResult",
    "InventoryAdjustmentResult",
    "ConsumedBatch",
]
