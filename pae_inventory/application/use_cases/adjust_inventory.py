"""Adjust Inventory Use Case: manual correction of one batch."""

from pae_inventory.application.dto.requests import AdjustInventoryRequest
from pae_inventory.application.dto.responses import InventoryAdjustmentResponse
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import InventoryAdjustment, InventoryAdjustmentResult
from pae_inventory.core.exceptions import (
    InsufficientStockError,
    InventoryBatchNotFoundError,
)
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import StockReconstructor

logger = get_logger(__name__)

_EPSILON = 1e-9


class AdjustInventoryUseCase:
    """Forward an adjustment, validating removals against the batch.

    Positive adjustments go straight through; they may refill a depleted
    batch. Negative ones must name a batch with enough stock left.
    """

    def __init__(
        self,
        gateway: IInventoryMovementGateway | None = None,
        reconstructor: StockReconstructor | None = None,
    ):
        self._gateway = gateway
        self._reconstructor = reconstructor

    def _get_gateway(self) -> IInventoryMovementGateway:
        if self._gateway is None:
            from pae_inventory.application.services import get_movement_gateway

            self._gateway = get_movement_gateway()
        return self._gateway

    def _get_reconstructor(self) -> StockReconstructor:
        if self._reconstructor is None:
            from pae_inventory.application.services import get_stock_reconstructor

            self._reconstructor = get_stock_reconstructor()
        return self._reconstructor

    async def execute(self, request: AdjustInventoryRequest) -> InventoryAdjustmentResult:
        """Execute adjust inventory use case."""
        logger.info(
            "adjust_inventory_started",
            product_id=request.product_id,
            inventory_id=request.inventory_id,
            quantity=request.quantity,
        )

        gateway = self._get_gateway()
        unit = request.unit

        if request.quantity < 0:
            institution_id = (
                request.institution_id
                if request.institution_id is not None
                else get_settings().inventory.default_institution_id
            )
            movements = await gateway.list_movements(
                request.product_id, institution_id=institution_id
            )
            snapshot = self._get_reconstructor().reconstruct(
                movements, request.product_id, institution_id
            )
            batch = next(
                (b for b in snapshot.batches if b.inventory_id == request.inventory_id),
                None,
            )
            if batch is None:
                raise InventoryBatchNotFoundError(request.product_id, request.inventory_id)

            if abs(request.quantity) > batch.available_quantity + _EPSILON:
                raise InsufficientStockError(
                    product_id=request.product_id,
                    requested=abs(request.quantity),
                    available=batch.available_quantity,
                    unit=batch.unit,
                    storage_location=batch.storage_location,
                )
            unit = unit or batch.unit

        adjustment = InventoryAdjustment(
            product_id=request.product_id,
            inventory_id=request.inventory_id,
            quantity=request.quantity,
            unit=unit,
            reason=request.reason,
            notes=request.notes,
            adjusted_by=request.adjusted_by,
        )
        result = await gateway.adjust(adjustment)

        logger.info(
            "adjust_inventory_complete",
            inventory_id=result.inventory_id,
            previous_stock=result.previous_stock,
            new_stock=result.new_stock,
        )
        return result

    def to_response(self, result: InventoryAdjustmentResult) -> InventoryAdjustmentResponse:
        """Convert result to API response."""
        return InventoryAdjustmentResponse(
            transaction_id=result.transaction_id,
            inventory_id=result.inventory_id,
            movement_id=result.movement_id,
            product_id=result.product_id,
            adjustment_quantity=result.adjustment_quantity,
            unit=result.unit,
            previous_stock=result.previous_stock,
            new_stock=result.new_stock,
            reason=result.reason,
            adjustment_date=result.adjustment_date,
        )
