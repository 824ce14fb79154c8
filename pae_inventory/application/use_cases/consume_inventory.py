"""Consume Inventory Use Case: take stock out with an availability check."""

from pae_inventory.application.dto.requests import ConsumeInventoryRequest
from pae_inventory.application.dto.responses import (
    ConsumedBatchResponse,
    InventoryConsumptionResponse,
)
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import (
    InventoryConsumption,
    InventoryConsumptionResult,
    StockSnapshot,
    normalize_location,
)
from pae_inventory.core.exceptions import InsufficientStockError, ValidationError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import StockReconstructor, to_utc_iso

logger = get_logger(__name__)

_EPSILON = 1e-9


def available_for(
    snapshot: StockSnapshot, unit: str, storage_location: str | None
) -> float:
    """Stock a consumption of ``unit`` at ``storage_location`` can draw on.

    Without a location every location holding the unit counts.
    """
    location = normalize_location(storage_location)
    return sum(
        b.available_quantity
        for b in snapshot.batches
        if b.unit == unit
        and (location is None or normalize_location(b.storage_location) == location)
    )


class ConsumeInventoryUseCase:
    """Check the request against reconstructed stock, then forward it.

    The purchases backend allocates the consumption FIFO; this check only
    rejects requests that cannot be covered at all.
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

    async def execute(self, request: ConsumeInventoryRequest) -> InventoryConsumptionResult:
        """Execute consume inventory use case."""
        institution_id = (
            request.institution_id
            if request.institution_id is not None
            else get_settings().inventory.default_institution_id
        )
        logger.info(
            "consume_inventory_started",
            product_id=request.product_id,
            institution_id=institution_id,
            quantity=request.quantity,
            unit=request.unit,
            storage_location=request.storage_location,
        )

        try:
            consumption_date = to_utc_iso(request.consumption_date)
        except ValueError as e:
            raise ValidationError(
                "consumption_date", str(e), request.consumption_date
            ) from e

        gateway = self._get_gateway()

        # 1. Check availability in the (unit, location) group
        movements = await gateway.list_movements(
            request.product_id, institution_id=institution_id
        )
        snapshot = self._get_reconstructor().reconstruct(
            movements, request.product_id, institution_id
        )
        available = available_for(snapshot, request.unit, request.storage_location)
        if request.quantity > available + _EPSILON:
            raise InsufficientStockError(
                product_id=request.product_id,
                requested=request.quantity,
                available=available,
                unit=request.unit,
                storage_location=request.storage_location,
            )

        # 2. Record the consumption
        consumption = InventoryConsumption(
            product_id=request.product_id,
            institution_id=institution_id,
            storage_location=request.storage_location,
            quantity=request.quantity,
            unit=request.unit,
            consumption_date=consumption_date,
            reason=request.reason,
            notes=request.notes,
            consumed_by=request.consumed_by,
        )
        result = await gateway.consume(consumption)

        logger.info(
            "consume_inventory_complete",
            product_id=result.product_id,
            consumed=result.total_quantity_consumed,
            batches=len(result.batch_details),
            remaining=available - result.total_quantity_consumed,
        )
        return result

    def to_response(
        self, result: InventoryConsumptionResult
    ) -> InventoryConsumptionResponse:
        """Convert result to API response."""
        return InventoryConsumptionResponse(
            transaction_id=result.transaction_id,
            product_id=result.product_id,
            institution_id=result.institution_id,
            storage_location=result.storage_location,
            total_quantity_consumed=result.total_quantity_consumed,
            unit=result.unit,
            consumption_date=result.consumption_date,
            batch_details=[
                ConsumedBatchResponse(
                    inventory_id=b.inventory_id,
                    lot=b.lot,
                    consumed_quantity=b.consumed_quantity,
                    remaining_quantity=b.remaining_quantity,
                )
                for b in result.batch_details
            ],
            movement_ids=list(result.movement_ids),
        )
