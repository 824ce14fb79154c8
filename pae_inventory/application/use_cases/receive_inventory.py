"""Receive Inventory Use Case: record goods received as a new batch."""

from pae_inventory.application.dto.requests import ReceiveInventoryRequest
from pae_inventory.application.dto.responses import InventoryReceiptResponse
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import InventoryReceipt, InventoryReceiptResult
from pae_inventory.core.exceptions import ValidationError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import to_date_only, to_utc_iso

logger = get_logger(__name__)


class ReceiveInventoryUseCase:
    """Forward a receipt to the purchases backend.

    Dates entered in Colombian local time are converted to UTC; the
    expiration date is sent as a plain calendar date.
    """

    def __init__(self, gateway: IInventoryMovementGateway | None = None):
        self._gateway = gateway

    def _get_gateway(self) -> IInventoryMovementGateway:
        if self._gateway is None:
            from pae_inventory.application.services import get_movement_gateway

            self._gateway = get_movement_gateway()
        return self._gateway

    async def execute(self, request: ReceiveInventoryRequest) -> InventoryReceiptResult:
        """Execute receive inventory use case."""
        logger.info(
            "receive_inventory_started",
            product_id=request.product_id,
            quantity=request.quantity_received,
            unit=request.unit_of_measure,
            storage_location=request.storage_location,
        )

        try:
            reception_date = to_utc_iso(request.reception_date)
        except ValueError as e:
            raise ValidationError("reception_date", str(e), request.reception_date) from e

        receipt = InventoryReceipt(
            product_id=request.product_id,
            institution_id=(
                request.institution_id
                if request.institution_id is not None
                else get_settings().inventory.default_institution_id
            ),
            storage_location=request.storage_location,
            quantity_received=request.quantity_received,
            unit_of_measure=request.unit_of_measure,
            expiration_date=to_date_only(request.expiration_date),
            batch_number=request.batch_number,
            purchase_order_id=request.purchase_order_id,
            received_by=request.received_by,
            reception_date=reception_date,
            notes=request.notes,
        )
        result = await self._get_gateway().receive(receipt)

        logger.info(
            "receive_inventory_complete",
            product_id=result.product_id,
            inventory_id=result.inventory_id,
            movement_id=result.movement_id,
        )
        return result

    def to_response(self, result: InventoryReceiptResult) -> InventoryReceiptResponse:
        """Convert result to API response."""
        return InventoryReceiptResponse(
            transaction_id=result.transaction_id,
            inventory_id=result.inventory_id,
            movement_id=result.movement_id,
            product_id=result.product_id,
            institution_id=result.institution_id,
            storage_location=result.storage_location,
            quantity_received=result.quantity_received,
            unit_of_measure=result.unit_of_measure,
            batch_number=result.batch_number,
            expiration_date=result.expiration_date,
            reception_date=result.reception_date,
        )
