"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field, field_validator

from pae_inventory.core.entities import DEFAULT_UNIT


class ReceiveInventoryRequest(BaseModel):
    """Request to receive goods into a storage location."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    institution_id: int | None = Field(
        default=None,
        description="Receiving institution (defaults to the configured one)",
    )
    storage_location: str = Field(..., min_length=1, description="Storage location")
    quantity_received: float = Field(..., gt=0, description="Quantity received")
    unit_of_measure: str = Field(default=DEFAULT_UNIT, description="Unit of measure")
    expiration_date: str = Field(
        ...,
        description="Expiration date (YYYY-MM-DD or ISO datetime)",
        examples=["2025-06-30"],
    )
    batch_number: str = Field(..., min_length=1, description="Supplier lot number")
    purchase_order_id: str | None = Field(default=None, description="Purchase order ID")
    received_by: str = Field(..., min_length=1, description="Who received the goods")
    reception_date: str | None = Field(
        default=None,
        description="Colombian local date or datetime (defaults to now)",
        examples=["2025-01-15", "2025-01-15T08:30"],
    )
    notes: str | None = Field(default=None, description="Additional notes")


class ConsumeInventoryRequest(BaseModel):
    """Request to take stock out for use."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    institution_id: int | None = Field(
        default=None,
        description="Consuming institution (defaults to the configured one)",
    )
    storage_location: str | None = Field(default=None, description="Storage location")
    quantity: float = Field(..., gt=0, description="Quantity to consume")
    unit: str = Field(default=DEFAULT_UNIT, description="Unit of measure")
    consumption_date: str | None = Field(
        default=None,
        description="Colombian local date or datetime (defaults to now)",
    )
    reason: str = Field(..., min_length=1, description="Reason for consumption")
    notes: str | None = Field(default=None, description="Additional notes")
    consumed_by: str = Field(..., min_length=1, description="Who consumed the stock")


class AdjustInventoryRequest(BaseModel):
    """Request to manually correct one batch."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    inventory_id: str = Field(..., min_length=1, description="Batch to adjust")
    institution_id: int | None = Field(
        default=None,
        description="Institution owning the batch (defaults to the configured one)",
    )
    quantity: float = Field(..., description="Signed quantity; negative removes stock")
    unit: str | None = Field(default=None, description="Unit of measure")
    reason: str = Field(..., min_length=1, description="Reason for adjustment")
    notes: str | None = Field(default=None, description="Additional notes")
    adjusted_by: str | None = Field(default=None, description="Who made the adjustment")

    @field_validator("quantity")
    @classmethod
    def non_zero(cls, v: float) -> float:
        if v == 0:
            raise ValueError("adjustment quantity must not be zero")
        return v
