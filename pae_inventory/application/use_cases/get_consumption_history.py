"""Get Consumption History Use Case: recent stock removals of one product."""

from datetime import timedelta

from pae_inventory.application.dto.responses import (
    ConsumptionHistoryResponse,
    MovementResponse,
)
from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import InventoryMovement
from pae_inventory.core.exceptions import PurchasesAPIError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import (
    MovementLogFilter,
    colombian_date,
    current_colombian_date,
    filter_movements,
)

logger = get_logger(__name__)


class GetConsumptionHistoryUseCase:
    """
    Usage, expiry, loss and removal movements, newest first.

    ``days`` limits the history to the last N Colombian calendar days,
    today included.
    """

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
        days: int | None = None,
    ) -> list[InventoryMovement]:
        """Execute get consumption history use case."""
        if institution_id is None:
            institution_id = get_settings().inventory.default_institution_id

        try:
            movements = await self._get_gateway().list_consumption_history(
                product_id,
                institution_id=institution_id,
                storage_location=storage_location,
            )
        except PurchasesAPIError as e:
            logger.warning(
                "consumption_history_degraded",
                product_id=product_id,
                institution_id=institution_id,
                error_code=e.code,
            )
            return []

        date_from = None
        if days is not None:
            date_from = current_colombian_date() - timedelta(days=days - 1)

        history = [
            m
            for m in filter_movements(movements, MovementLogFilter(date_from=date_from))
            if m.is_consumption
        ]
        logger.info(
            "consumption_history_loaded",
            product_id=product_id,
            fetched=len(movements),
            shown=len(history),
        )
        return history

    def to_response(
        self, product_id: str, history: list[InventoryMovement]
    ) -> ConsumptionHistoryResponse:
        """Convert history to API response."""
        return ConsumptionHistoryResponse(
            product_id=product_id,
            movements=[
                MovementResponse(
                    **m.model_dump(exclude={"movement_type"}),
                    movement_type=m.movement_type.value,
                    movement_day=colombian_date(m.movement_date).isoformat(),
                )
                for m in history
            ],
            total=len(history),
            total_quantity=sum(abs(m.quantity) for m in history),
        )
