"""Get Movement Log Use Case: visible, filtered movements with counts."""

from dataclasses import dataclass, field

from pae_inventory.application.dto.responses import (
    MovementCountsResponse,
    MovementLogResponse,
    MovementResponse,
)
from pae_inventory.config import get_logger
from pae_inventory.core.entities import InventoryMovement, MovementCounts
from pae_inventory.core.exceptions import PurchasesAPIError
from pae_inventory.core.interfaces import IInventoryMovementGateway
from pae_inventory.core.services import (
    MovementLogFilter,
    colombian_date,
    count_movements,
    filter_movements,
)

logger = get_logger(__name__)


@dataclass
class MovementLogResult:
    """Filtered log plus counts over the whole visible log."""

    product_id: str
    movements: list[InventoryMovement] = field(default_factory=list)
    counts: MovementCounts = field(default_factory=MovementCounts)


class GetMovementLogUseCase:
    """Movement history of one product as shown on the dashboard."""

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
        log_filter: MovementLogFilter | None = None,
    ) -> MovementLogResult:
        """Execute get movement log use case."""
        try:
            movements = await self._get_gateway().list_movements(product_id)
        except PurchasesAPIError as e:
            logger.warning(
                "movement_log_degraded",
                product_id=product_id,
                error_code=e.code,
                error=e.message,
            )
            return MovementLogResult(product_id=product_id)

        filtered = filter_movements(movements, log_filter)
        logger.info(
            "movement_log_loaded",
            product_id=product_id,
            fetched=len(movements),
            shown=len(filtered),
        )
        return MovementLogResult(
            product_id=product_id,
            movements=filtered,
            counts=count_movements(movements),
        )

    def to_response(self, result: MovementLogResult) -> MovementLogResponse:
        """Convert result to API response."""
        counts = result.counts
        return MovementLogResponse(
            product_id=result.product_id,
            movements=[
                MovementResponse(
                    **m.model_dump(exclude={"movement_type"}),
                    movement_type=m.movement_type.value,
                    movement_day=colombian_date(m.movement_date).isoformat(),
                )
                for m in result.movements
            ],
            total=len(result.movements),
            counts=MovementCountsResponse(
                receipts=counts.receipts,
                usages=counts.usages,
                adjustments=counts.adjustments,
                expired=counts.expired,
                losses=counts.losses,
                total=counts.total,
            ),
        )
