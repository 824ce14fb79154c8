"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# --- Stock ---


class InventoryBatchResponse(BaseModel):
    """One batch with stock left."""

    inventory_id: str
    lot: str | None = None
    available_quantity: float
    unit: str
    storage_location: str | None = None
    institution_id: int
    expiration_date: datetime | None = None
    date_of_admission: datetime


class StockSnapshotResponse(BaseModel):
    """Available stock of one product, batches in FIFO order."""

    product_id: str
    institution_id: int
    total_available: float
    unit: str
    batches: list[InventoryBatchResponse] = Field(default_factory=list)


class StockSummaryResponse(BaseModel):
    """Per-type quantity totals and current stock."""

    product_id: str
    institution_id: int
    storage_location: str | None = None
    total_received: float
    total_used: float
    total_expired: float
    total_lost: float
    total_adjusted: float
    current_stock: float
    unit: str
    movements_count: int
    last_movement_date: datetime | None = None


# --- Movement log ---


class MovementResponse(BaseModel):
    """Movement log entry."""

    id: str
    movement_type: str
    product_id: str
    institution_id: int
    storage_location: str | None = None
    quantity: float
    unit: str
    lot: str | None = None
    expiration_date: datetime | None = None
    reference_id: str | None = None
    reference_type: str | None = None
    movement_date: datetime
    movement_day: str = Field(..., description="Colombian calendar date (YYYY-MM-DD)")
    notes: str | None = None
    reason: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None


class MovementCountsResponse(BaseModel):
    """Visible movements per type."""

    receipts: int = 0
    usages: int = 0
    adjustments: int = 0
    expired: int = 0
    losses: int = 0
    total: int = 0


class MovementLogResponse(BaseModel):
    """Filtered movement log with counts over the whole visible log."""

    product_id: str
    movements: list[MovementResponse] = Field(default_factory=list)
    total: int = 0
    counts: MovementCountsResponse = Field(default_factory=MovementCountsResponse)


class ConsumptionHistoryResponse(BaseModel):
    """Removal movements of one product, newest first."""

    product_id: str
    movements: list[MovementResponse] = Field(default_factory=list)
    total: int = 0
    total_quantity: float = 0.0


# --- Movement commands ---


class InventoryReceiptResponse(BaseModel):
    """Receipt recorded by the purchases backend."""

    transaction_id: str
    inventory_id: str
    movement_id: str
    product_id: str
    institution_id: int
    storage_location: str
    quantity_received: float
    unit_of_measure: str
    batch_number: str | None = None
    expiration_date: str | None = None
    reception_date: datetime | None = None


class ConsumedBatchResponse(BaseModel):
    """Share of a consumption taken from one batch."""

    inventory_id: str
    lot: str | None = None
    consumed_quantity: float
    remaining_quantity: float


class InventoryConsumptionResponse(BaseModel):
    """Consumption recorded by the purchases backend."""

    transaction_id: str
    product_id: str
    institution_id: int
    storage_location: str | None = None
    total_quantity_consumed: float
    unit: str
    consumption_date: datetime | None = None
    batch_details: list[ConsumedBatchResponse] = Field(default_factory=list)
    movement_ids: list[str] = Field(default_factory=list)


class InventoryAdjustmentResponse(BaseModel):
    """Adjustment recorded by the purchases backend."""

    transaction_id: str
    inventory_id: str
    movement_id: str
    product_id: str
    adjustment_quantity: float
    unit: str
    previous_stock: float
    new_stock: float
    reason: str | None = None
    adjustment_date: datetime | None = None


# --- Health & errors ---


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    purchases_api: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
