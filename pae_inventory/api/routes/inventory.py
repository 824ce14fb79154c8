"""Inventory endpoints: stock, movement log, summary and movement commands."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from pae_inventory.api.dependencies import (
    get_adjust_inventory_use_case,
    get_available_stock_use_case,
    get_consume_inventory_use_case,
    get_consumption_history_use_case,
    get_movement_log_use_case,
    get_receive_inventory_use_case,
    get_stock_summary_use_case,
)
from pae_inventory.application.dto.requests import (
    AdjustInventoryRequest,
    ConsumeInventoryRequest,
    ReceiveInventoryRequest,
)
from pae_inventory.application.dto.responses import (
    ConsumptionHistoryResponse,
    ErrorResponse,
    InventoryAdjustmentResponse,
    InventoryConsumptionResponse,
    InventoryReceiptResponse,
    MovementLogResponse,
    StockSnapshotResponse,
    StockSummaryResponse,
)
from pae_inventory.application.use_cases import (
    AdjustInventoryUseCase,
    ConsumeInventoryUseCase,
    GetAvailableStockUseCase,
    GetConsumptionHistoryUseCase,
    GetMovementLogUseCase,
    GetStockSummaryUseCase,
    ReceiveInventoryUseCase,
)
from pae_inventory.core.entities import MovementType
from pae_inventory.core.services import MovementLogFilter

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

_UPSTREAM_ERRORS = {
    401: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.get("/{product_id}/stock", response_model=StockSnapshotResponse)
async def get_available_stock(
    product_id: str,
    institution_id: int | None = None,
    storage_location: str | None = Query(
        default=None,
        description='Exact location; "unspecified" selects movements without one',
    ),
    use_case: GetAvailableStockUseCase = Depends(get_available_stock_use_case),
) -> StockSnapshotResponse:
    """Available stock per batch, oldest first."""
    snapshot = await use_case.execute(product_id, institution_id, storage_location)
    return use_case.to_response(snapshot)


@router.get("/{product_id}/movements", response_model=MovementLogResponse)
async def get_movement_log(
    product_id: str,
    search: str | None = Query(default=None, description="Matches product, notes or lot"),
    movement_type: MovementType | None = None,
    institution_id: int | None = None,
    date_from: date | None = Query(default=None, description="Colombian date, inclusive"),
    date_to: date | None = Query(default=None, description="Colombian date, inclusive"),
    use_case: GetMovementLogUseCase = Depends(get_movement_log_use_case),
) -> MovementLogResponse:
    """Visible movement log, newest first."""
    log_filter = MovementLogFilter(
        search=search,
        movement_type=movement_type,
        institution_id=institution_id,
        date_from=date_from,
        date_to=date_to,
    )
    result = await use_case.execute(product_id, log_filter)
    return use_case.to_response(result)


@router.get("/{product_id}/summary", response_model=StockSummaryResponse)
async def get_stock_summary(
    product_id: str,
    institution_id: int | None = None,
    storage_location: str | None = None,
    use_case: GetStockSummaryUseCase = Depends(get_stock_summary_use_case),
) -> StockSummaryResponse:
    """Per-type totals and current stock."""
    summary = await use_case.execute(product_id, institution_id, storage_location)
    return use_case.to_response(summary)


@router.get("/{product_id}/consumption-history", response_model=ConsumptionHistoryResponse)
async def get_consumption_history(
    product_id: str,
    institution_id: int | None = None,
    storage_location: str | None = None,
    days: int | None = Query(
        default=None, ge=1, description="Last N Colombian days, today included"
    ),
    use_case: GetConsumptionHistoryUseCase = Depends(get_consumption_history_use_case),
) -> ConsumptionHistoryResponse:
    """Usage, expiry, loss and removal movements, newest first."""
    history = await use_case.execute(product_id, institution_id, storage_location, days)
    return use_case.to_response(product_id, history)


@router.post(
    "/receive",
    response_model=InventoryReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, **_UPSTREAM_ERRORS},
)
async def receive_inventory(
    request: ReceiveInventoryRequest,
    use_case: ReceiveInventoryUseCase = Depends(get_receive_inventory_use_case),
) -> InventoryReceiptResponse:
    """Record goods received as a new batch."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/consume",
    response_model=InventoryConsumptionResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        **_UPSTREAM_ERRORS,
    },
)
async def consume_inventory(
    request: ConsumeInventoryRequest,
    use_case: ConsumeInventoryUseCase = Depends(get_consume_inventory_use_case),
) -> InventoryConsumptionResponse:
    """Consume stock FIFO after checking availability."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/adjust",
    response_model=InventoryAdjustmentResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        **_UPSTREAM_ERRORS,
    },
)
async def adjust_inventory(
    request: AdjustInventoryRequest,
    use_case: AdjustInventoryUseCase = Depends(get_adjust_inventory_use_case),
) -> InventoryAdjustmentResponse:
    """Manually correct one batch."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
