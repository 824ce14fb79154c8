"""Get Stock Summary Use Case."""

from pae_inventory.application.dto.responses import StockSummaryResponse
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import StockSummary
from pae_inventory.core.exceptions import PurchasesAPIError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import summarize_stock

logger = get_logger(__name__)


class GetStockSummaryUseCase:
    """Received, used, expired, lost and adjusted totals for one product."""

    def __init__(self, gateway: IInventoryMovementGateway | None = None):
        self._gateway = gateway

    def _get_gateway(self) -> IInventoryMovementGateway:
        if self._gateway is None:
            from pae_inventory.application.services import get_movement_gateway

            self._gateway = get_movement_gateway()
        return self._gateway

    async def execute(
        self,
        product_id: str,
        institution_id: int | None = None,
        storage_location: str | None = None,
    ) -> StockSummary:
        """Execute get stock summary use case."""
        if institution_id is None:
            institution_id = get_settings().inventory.default_institution_id

        try:
            movements = await self._get_gateway().list_movements(
                product_id, institution_id=institution_id
            )
        except PurchasesAPIError as e:
            logger.warning(
                "stock_summary_degraded",
                product_id=product_id,
                institution_id=institution_id,
                error_code=e.code,
            )
            return StockSummary(
                product_id=product_id,
                institution_id=institution_id,
                storage_location=storage_location,
            )

        return summarize_stock(movements, product_id, institution_id, storage_location)

    def to_response(self, summary: StockSummary) -> StockSummaryResponse:
        """Convert summary to API response."""
        return StockSummaryResponse(**summary.model_dump())
