"""Commands sent to the purchases backend and the records it returns.

Field names follow the purchases backend's JSON contract.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pae_inventory.core.entities.inventory import DEFAULT_UNIT


class InventoryReceipt(BaseModel):
    """Goods received into a storage location (creates a batch)."""

    product_id: str
    institution_id: int
    storage_location: str
    quantity_received: float = Field(..., gt=0)
    unit_of_measure: str = DEFAULT_UNIT
    expiration_date: str
    batch_number: str
    purchase_order_id: str | None = None
    received_by: str
    reception_date: str | None = None  # ISO UTC
    notes: str | None = None


class InventoryConsumption(BaseModel):
    """Stock taken out for use; the backend allocates it FIFO."""

    product_id: str
    institution_id: int
    storage_location: str | None = None
    quantity: float = Field(..., gt=0)
    unit: str = DEFAULT_UNIT
    consumption_date: str | None = None  # ISO UTC
    reason: str
    notes: str | None = None
    consumed_by: str


class InventoryAdjustment(BaseModel):
    """Manual correction of one batch; negative quantities remove stock."""

    product_id: str
    inventory_id: str
    quantity: float
    unit: str | None = None
    reason: str
    notes: str | None = None
    adjusted_by: str | None = None


class InventoryReceiptResult(BaseModel):
    """Backend acknowledgement of a receipt."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    transaction_id: str
    inventory_id: str
    product_id: str
    institution_id: int
    storage_location: str
    quantity_received: float
    unit_of_measure: str
    expiration_date: str | None = None
    batch_number: str | None = None
    purchase_order_id: str | None = None
    received_by: str | None = None
    reception_date: datetime | None = None
    movement_id: str
    notes: str | None = None
    created_at: datetime | None = None


class ConsumedBatch(BaseModel):
    """Share of a consumption taken from one batch."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    inventory_id: str
    lot: str | None = None
    consumed_quantity: float
    remaining_quantity: float
    expiration_date: datetime | None = None
    date_of_admission: datetime | None = None


class InventoryConsumptionResult(BaseModel):
    """Backend acknowledgement of a consumption."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    transaction_id: str
    product_id: str
    institution_id: int
    storage_location: str | None = None
    total_quantity_consumed: float
    unit: str
    consumption_date: datetime | None = None
    reason: str | None = None
    notes: str | None = None
    consumed_by: str | None = None
    batch_details: list[ConsumedBatch] = Field(default_factory=list)
    movement_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class InventoryAdjustmentResult(BaseModel):
    """Backend acknowledgement of a manual adjustment."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    transaction_id: str
    inventory_id: str
    product_id: str
    institution_id: int | None = None
    storage_location: str | None = None
    adjustment_quantity: float
    unit: str
    reason: str | None = None
    notes: str | None = None
    adjusted_by: str | None = None
    previous_stock: float
    new_stock: float
    movement_id: str
    adjustment_date: datetime | None = None
    created_at: datetime | None = None
