"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from pae_inventory.application.dto.requests import (
    AdjustInventoryRequest,
    ConsumeInventoryRequest,
    ReceiveInventoryRequest,
)
from pae_inventory.application.dto.responses import (
    ConsumedBatchResponse,
    ConsumptionHistoryResponse,
    ErrorResponse,
    HealthResponse,
    InventoryAdjustmentResponse,
    InventoryBatchResponse,
    InventoryConsumptionResponse,
    InventoryReceiptResponse,
    MovementCountsResponse,
    MovementLogResponse,
    MovementResponse,
    ProviderHealthResponse,
    StockSnapshotResponse,
    StockSummaryResponse,
)

__all__ = [
    # Requests
    "ReceiveInventoryRequest",
    "ConsumeInventoryRequest",
    "AdjustInventoryRequest",
    # Responses
    "InventoryBatchResponse",
    "StockSnapshotResponse",
    "StockSummaryResponse",
    "MovementResponse",
    "MovementCountsResponse",
    "MovementLogResponse",
    "ConsumptionHistoryResponse",
    "InventoryReceiptResponse",
    "ConsumedBatchResponse",
    "InventoryConsumptionResponse",
    "InventoryAdjustmentResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
