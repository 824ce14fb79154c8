"""Inventory domain entities."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Reason tag on internal bookkeeping movements; never shown or reconciled.
SYSTEM_REASON = "SYSTEM"

DEFAULT_UNIT = "unidad"

# Location filter value that selects movements recorded without a location.
UNSPECIFIED_LOCATION = "unspecified"


def normalize_location(location: str | None) -> str | None:
    """Collapse missing and blank storage locations into one key variant."""
    if location is None:
        return None
    location = location.strip()
    return location or None


def _as_utc(value: datetime | None) -> datetime | None:
    """Naive timestamps coming off the wire are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MovementType(str, Enum):
    """Types of inventory movements."""

    RECEIPT = "receipt"
    USAGE = "usage"
    ADJUSTMENT = "adjustment"
    EXPIRED = "expired"
    LOSS = "loss"


class InventoryMovement(BaseModel):
    """A single append-only movement record from the purchases backend."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    id: str = Field(alias="_id")
    movement_type: MovementType
    product_id: str
    institution_id: int
    storage_location: str | None = None
    quantity: float
    unit: str = DEFAULT_UNIT
    lot: str | None = None
    expiration_date: datetime | None = None
    reference_id: str | None = None
    reference_type: str | None = None
    movement_date: datetime
    notes: str | None = None
    reason: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    @field_validator("movement_date", "expiration_date", "created_at")
    @classmethod
    def ensure_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @property
    def is_system(self) -> bool:
        """Internal bookkeeping movement."""
        return self.reason == SYSTEM_REASON

    @property
    def location_key(self) -> str | None:
        return normalize_location(self.storage_location)

    @property
    def is_consumption(self) -> bool:
        """Removes stock: usage, expiry, loss or a negative adjustment."""
        if self.movement_type in (
            MovementType.USAGE,
            MovementType.EXPIRED,
            MovementType.LOSS,
        ):
            return True
        return self.movement_type == MovementType.ADJUSTMENT and self.quantity < 0

    @property
    def is_positive_adjustment(self) -> bool:
        return self.movement_type == MovementType.ADJUSTMENT and self.quantity > 0


class InventoryBatch(BaseModel):
    """Stock remaining from one receipt (or one unmatched positive adjustment)."""

    model_config = ConfigDict(frozen=True)

    inventory_id: str
    lot: str | None = None
    available_quantity: float
    unit: str
    storage_location: str | None = None
    institution_id: int
    expiration_date: datetime | None = None
    date_of_admission: datetime


class StockSnapshot(BaseModel):
    """Point-in-time view of available stock for one product."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    institution_id: int
    total_available: float = 0.0
    unit: str = DEFAULT_UNIT
    batches: list[InventoryBatch] = Field(default_factory=list)

    @classmethod
    def empty(cls, product_id: str, institution_id: int) -> "StockSnapshot":
        """Snapshot with no stock, used when the movement log is unavailable."""
        return cls(product_id=product_id, institution_id=institution_id)


class MovementCounts(BaseModel):
    """Number of visible movements per type."""

    receipts: int = 0
    usages: int = 0
    adjustments: int = 0
    expired: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.receipts + self.usages + self.adjustments + self.expired + self.losses


class StockSummary(BaseModel):
    """Per-type quantity totals alongside the current reconstructed stock."""

    product_id: str
    institution_id: int
    storage_location: str | None = None
    total_received: float = 0.0
    total_used: float = 0.0
    total_expired: float = 0.0
    total_lost: float = 0.0
    total_adjusted: float = 0.0  # net, signed
    current_stock: float = 0.0
    unit: str = DEFAULT_UNIT
    movements_count: int = 0
    last_movement_date: datetime | None = None
