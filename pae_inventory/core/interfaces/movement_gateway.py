"""Abstract interface for the inventory movement log provider."""

from abc import ABC, abstractmethod

from pae_inventory.core.entities.inventory import InventoryMovement, MovementType
from pae_inventory.core.entities.movement_commands import (
    InventoryAdjustment,
    InventoryAdjustmentResult,
    InventoryConsumption,
    InventoryConsumptionResult,
    InventoryReceipt,
    InventoryReceiptResult,
)


class IInventoryMovementGateway(ABC):
    """Interface for reading and appending inventory movements.

    Movements are persisted by an external service; implementations
    only relay requests to it.
    """

    @abstractmethod
    async def list_movements(
        self,
        product_id: str,
        institution_id: int | None = None,
        movement_type: MovementType | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[InventoryMovement]:
        """List movements for a product. Unknown products yield an empty list."""
        pass

    @abstractmethod
    async def list_consumption_history(
        self,
        product_id: str,
        institution_id: int | None = None,
        storage_location: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[InventoryMovement]:
        """List consumption movements for a product."""
        pass

    @abstractmethod
    async def receive(self, receipt: InventoryReceipt) -> InventoryReceiptResult:
        """Record goods received."""
        pass

    @abstractmethod
    async def consume(
        self, consumption: InventoryConsumption
    ) -> InventoryConsumptionResult:
        """Record stock consumed."""
        pass

    @abstractmethod
    async def adjust(self, adjustment: InventoryAdjustment) -> InventoryAdjustmentResult:
        """Record a manual adjustment of one batch."""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        """Whether the movement provider is reachable."""
        pass
