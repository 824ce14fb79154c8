"""API tests for inventory endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from pae_inventory.api.dependencies import (
    get_adjust_inventory_use_case,
    get_available_stock_use_case,
    get_consume_inventory_use_case,
    get_consumption_history_use_case,
    get_movement_log_use_case,
    get_receive_inventory_use_case,
    get_stock_summary_use_case,
)
from pae_inventory.api.main import app
from pae_inventory.application.use_cases import (
    AdjustInventoryUseCase,
    ConsumeInventoryUseCase,
    GetAvailableStockUseCase,
    GetConsumptionHistoryUseCase,
    GetMovementLogUseCase,
    GetStockSummaryUseCase,
    ReceiveInventoryUseCase,
)
from pae_inventory.core.entities import (
    InventoryConsumptionResult,
    InventoryReceiptResult,
    MovementType,
)
from pae_inventory.core.exceptions import (
    PurchasesAPIError,
    PurchasesAPIUnavailableError,
    PurchasesAuthError,
)
from pae_inventory.core.services import StockReconstructor

_OVERRIDES = (
    get_available_stock_use_case,
    get_movement_log_use_case,
    get_stock_summary_use_case,
    get_receive_inventory_use_case,
    get_consume_inventory_use_case,
    get_adjust_inventory_use_case,
    get_consumption_history_use_case,
)


@pytest.fixture
def mock_gateway(make_movement):
    gateway = AsyncMock()
    gateway.list_movements.return_value = [
        make_movement(MovementType.RECEIPT, 100, id="r1", lot="L-1", reference_id="INV-1"),
        make_movement(MovementType.USAGE, 30, id="u1", day=1, notes="Almuerzo"),
        make_movement(MovementType.USAGE, 2, id="s1", day=1, reason="SYSTEM"),
    ]
    return gateway


@pytest.fixture
async def inv_client(mock_gateway):
    reconstructor = StockReconstructor()
    app.dependency_overrides[get_available_stock_use_case] = lambda: GetAvailableStockUseCase(
        mock_gateway, reconstructor
    )
    app.dependency_overrides[get_movement_log_use_case] = lambda: GetMovementLogUseCase(
        mock_gateway
    )
    app.dependency_overrides[get_stock_summary_use_case] = lambda: GetStockSummaryUseCase(
        mock_gateway
    )
    app.dependency_overrides[get_receive_inventory_use_case] = lambda: ReceiveInventoryUseCase(
        mock_gateway
    )
    app.dependency_overrides[get_consume_inventory_use_case] = lambda: ConsumeInventoryUseCase(
        mock_gateway, reconstructor
    )
    app.dependency_overrides[get_adjust_inventory_use_case] = lambda: AdjustInventoryUseCase(
        mock_gateway, reconstructor
    )
    app.dependency_overrides[get_consumption_history_use_case] = (
        lambda: GetConsumptionHistoryUseCase(mock_gateway)
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in _OVERRIDES:
        app.dependency_overrides.pop(dependency, None)


class TestReadEndpoints:
    async def test_stock(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/P-001/stock", params={"institution_id": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["total_available"] == 70
        assert body["unit"] == "kg"
        assert body["batches"][0]["inventory_id"] == "INV-1"
        assert body["batches"][0]["available_quantity"] == 70

    async def test_stock_degrades_when_backend_down(
        self, inv_client: AsyncClient, mock_gateway
    ):
        mock_gateway.list_movements.side_effect = PurchasesAPIUnavailableError(
            "list_movements", "HTTP 503"
        )

        response = await inv_client.get("/api/inventory/P-001/stock")

        assert response.status_code == 200
        assert response.json()["total_available"] == 0
        assert response.json()["batches"] == []

    async def test_movements(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/P-001/movements")

        assert response.status_code == 200
        body = response.json()
        assert [m["id"] for m in body["movements"]] == ["u1", "r1"]
        assert body["movements"][0]["movement_day"] == "2025-03-02"
        assert body["counts"]["total"] == 2

    async def test_movements_filters(self, inv_client: AsyncClient):
        response = await inv_client.get(
            "/api/inventory/P-001/movements",
            params={"search": "almuerzo", "movement_type": "usage", "date_from": "2025-03-02"},
        )

        body = response.json()
        assert [m["id"] for m in body["movements"]] == ["u1"]
        assert body["total"] == 1

    async def test_movements_rejects_unknown_type(self, inv_client: AsyncClient):
        response = await inv_client.get(
            "/api/inventory/P-001/movements", params={"movement_type": "transfer"}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_summary(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/P-001/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["total_received"] == 100
        assert body["total_used"] == 30
        assert body["current_stock"] == 70
        assert body["movements_count"] == 2


class TestReceiveEndpoint:
    async def test_receive_returns_201(self, inv_client: AsyncClient, mock_gateway):
        mock_gateway.receive.return_value = InventoryReceiptResult(
            transaction_id="tx-1",
            inventory_id="INV-2",
            product_id="P-001",
            institution_id=1,
            storage_location="Bodega",
            quantity_received=25,
            unit_of_measure="kg",
            movement_id="mv-1",
        )

        response = await inv_client.post(
            "/api/inventory/receive",
            json={
                "product_id": "P-001",
                "storage_location": "Bodega",
                "quantity_received": 25,
                "unit_of_measure": "kg",
                "expiration_date": "2025-09-30",
                "batch_number": "L-2",
                "received_by": "bodeguero",
            },
        )

        assert response.status_code == 201
        assert response.json()["inventory_id"] == "INV-2"

    async def test_receive_rejects_non_positive_quantity(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/receive",
            json={
                "product_id": "P-001",
                "storage_location": "Bodega",
                "quantity_received": 0,
                "expiration_date": "2025-09-30",
                "batch_number": "L-2",
                "received_by": "bodeguero",
            },
        )

        assert response.status_code == 422


class TestConsumeEndpoint:
    async def test_consume(self, inv_client: AsyncClient, mock_gateway):
        mock_gateway.consume.return_value = InventoryConsumptionResult(
            transaction_id="tx-2",
            product_id="P-001",
            institution_id=1,
            total_quantity_consumed=10,
            unit="kg",
        )

        response = await inv_client.post(
            "/api/inventory/consume",
            json={
                "product_id": "P-001",
                "quantity": 10,
                "unit": "kg",
                "reason": "Almuerzo",
                "consumed_by": "cocina",
            },
        )

        assert response.status_code == 200
        assert response.json()["total_quantity_consumed"] == 10

    async def test_insufficient_stock_is_409(self, inv_client: AsyncClient, mock_gateway):
        response = await inv_client.post(
            "/api/inventory/consume",
            json={
                "product_id": "P-001",
                "quantity": 71,
                "unit": "kg",
                "reason": "Almuerzo",
                "consumed_by": "cocina",
            },
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert "available=70" in body["detail"]
        assert body["hint"]
        mock_gateway.consume.assert_not_called()

    @pytest.mark.parametrize(
        ("error", "status_code", "error_code"),
        [
            (PurchasesAuthError("list_movements", 401), 401, "PURCHASES_AUTH_FAILED"),
            (
                PurchasesAPIUnavailableError("list_movements", "HTTP 503", attempts=3),
                503,
                "PURCHASES_API_UNAVAILABLE",
            ),
            (
                PurchasesAPIError("list_movements", "HTTP 400", status_code=400),
                502,
                "PURCHASES_API_ERROR",
            ),
        ],
    )
    async def test_backend_failures_propagate_on_writes(
        self, inv_client: AsyncClient, mock_gateway, error, status_code, error_code
    ):
        mock_gateway.list_movements.side_effect = error

        response = await inv_client.post(
            "/api/inventory/consume",
            json={
                "product_id": "P-001",
                "quantity": 1,
                "reason": "Almuerzo",
                "consumed_by": "cocina",
            },
        )

        assert response.status_code == status_code
        assert response.json()["error_code"] == error_code
        assert response.json()["path"] == "/api/inventory/consume"


class TestAdjustEndpoint:
    async def test_unknown_batch_is_404(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/adjust",
            json={
                "product_id": "P-001",
                "inventory_id": "INV-404",
                "quantity": -1,
                "reason": "Conteo",
            },
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "INVENTORY_BATCH_NOT_FOUND"

    async def test_zero_quantity_is_422(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/adjust",
            json={
                "product_id": "P-001",
                "inventory_id": "INV-1",
                "quantity": 0,
                "reason": "Conteo",
            },
        )

        assert response.status_code == 422


class TestRequestId:
    async def test_generated_when_missing(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/P-001/summary")
        assert len(response.headers["X-Request-ID"]) == 8
        assert "X-Response-Time" in response.headers

    async def test_incoming_id_is_echoed(self, inv_client: AsyncClient):
        response = await inv_client.get(
            "/api/inventory/P-001/summary", headers={"X-Request-ID": "abc-123"}
        )
        assert response.headers["X-Request-ID"] == "abc-123"


class TestConsumptionHistoryEndpoint:
    async def test_history(self, inv_client: AsyncClient, mock_gateway, make_movement):
        mock_gateway.list_consumption_history.return_value = [
            make_movement(MovementType.USAGE, 30, id="u1", day=1),
            make_movement(MovementType.LOSS, 3, id="l1", day=2),
        ]

        response = await inv_client.get(
            "/api/inventory/P-001/consumption-history", params={"storage_location": "X"}
        )

        assert response.status_code == 200
        body = response.json()
        assert [m["id"] for m in body["movements"]] == ["l1", "u1"]
        assert body["total_quantity"] == 33
        mock_gateway.list_consumption_history.assert_awaited_once_with(
            "P-001", institution_id=1, storage_location="X"
        )

    async def test_days_must_be_positive(self, inv_client: AsyncClient):
        response = await inv_client.get(
            "/api/inventory/P-001/consumption-history", params={"days": 0}
        )

        assert response.status_code == 422
