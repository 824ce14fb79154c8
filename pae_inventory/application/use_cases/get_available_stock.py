"""Get Available Stock Use Case: reconstruct stock from the movement log."""

from pae_inventory.application.dto.responses import (
    InventoryBatchResponse,
    StockSnapshotResponse,
)
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import StockSnapshot
from pae_inventory.core.exceptions import PurchasesAPIError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import StockReconstructor

logger = get_logger(__name__)


class GetAvailableStockUseCase:
    """
    Current stock of one product, split into FIFO batches.

    Read path: when the purchases backend fails, the dashboard gets an
    empty snapshot instead of an error.
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

    async def execute(
        self,
        product_id: str,
        institution_id: int | None = None,
        storage_location: str | None = None,
    ) -> StockSnapshot:
        """Execute get available stock use case."""
        if institution_id is None:
            institution_id = get_settings().inventory.default_institution_id

        try:
            movements = await self._get_gateway().list_movements(
                product_id, institution_id=institution_id
            )
        except PurchasesAPIError as e:
            logger.warning(
                "available_stock_degraded",
                product_id=product_id,
                institution_id=institution_id,
                error_code=e.code,
                error=e.message,
            )
            return StockSnapshot.empty(product_id, institution_id)

        snapshot = self._get_reconstructor().reconstruct(
            movements, product_id, institution_id, storage_location
        )
        logger.info(
            "available_stock_computed",
            product_id=product_id,
            institution_id=institution_id,
            total_available=snapshot.total_available,
            batches=len(snapshot.batches),
        )
        return snapshot

    def to_response(self, snapshot: StockSnapshot) -> StockSnapshotResponse:
        """Convert snapshot to API response."""
        return StockSnapshotResponse(
            product_id=snapshot.product_id,
            institution_id=snapshot.institution_id,
            total_available=snapshot.total_available,
            unit=snapshot.unit,
            batches=[
                InventoryBatchResponse(**batch.model_dump())
                for batch in snapshot.batches
            ],
        )
