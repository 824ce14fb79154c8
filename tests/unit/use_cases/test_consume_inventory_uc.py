"""Tests for ConsumeInventoryUseCase."""

import pytest

from pae_inventory.application.dto.requests import ConsumeInventoryRequest
from pae_inventory.application.use_cases.consume_inventory import (
    ConsumeInventoryUseCase,
    available_for,
)
from pae_inventory.core.entities import (
    ConsumedBatch,
    InventoryConsumptionResult,
    MovementType,
)
from pae_inventory.core.exceptions import InsufficientStockError, ValidationError
from pae_inventory.core.services import reconstruct_stock


def _request(**overrides) -> ConsumeInventoryRequest:
    data = {
        "product_id": "P-001",
        "institution_id": 1,
        "quantity": 30,
        "unit": "kg",
        "reason": "Almuerzo escolar",
        "consumed_by": "cocina",
        "consumption_date": "2025-03-02T10:00",
    }
    data.update(overrides)
    return ConsumeInventoryRequest(**data)


def _result(quantity: float) -> InventoryConsumptionResult:
    return InventoryConsumptionResult(
        transaction_id="tx-1",
        product_id="P-001",
        institution_id=1,
        total_quantity_consumed=quantity,
        unit="kg",
        batch_details=[
            ConsumedBatch(
                inventory_id="r1", lot="L-1", consumed_quantity=quantity, remaining_quantity=0
            )
        ],
        movement_ids=["mv-1"],
    )


@pytest.fixture
def stocked_gateway(mock_gateway, make_movement):
    """40 kg at X and 20 kg at Y, plus 100 g at X."""
    mock_gateway.list_movements.return_value = [
        make_movement(MovementType.RECEIPT, 40, id="r1", location="X"),
        make_movement(MovementType.RECEIPT, 20, id="r2", location="Y", day=1),
        make_movement(MovementType.RECEIPT, 100, id="r3", unit="g", day=2),
    ]
    return mock_gateway


class TestAvailableFor:
    def test_groups_by_unit_and_location(self, make_movement):
        snapshot = reconstruct_stock(
            [
                make_movement(MovementType.RECEIPT, 40, location="X"),
                make_movement(MovementType.RECEIPT, 20, location=" Y "),
                make_movement(MovementType.RECEIPT, 5, unit="g"),
            ],
            "P-001",
            1,
        )
        assert available_for(snapshot, "kg", None) == 60
        assert available_for(snapshot, "kg", "Y") == 20
        assert available_for(snapshot, "g", "X") == 5
        assert available_for(snapshot, "lb", None) == 0


class TestConsumeInventoryUseCase:
    async def test_successful_consumption(self, stocked_gateway, reconstructor):
        stocked_gateway.consume.return_value = _result(30)
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        result = await use_case.execute(_request(storage_location="X"))

        assert result.total_quantity_consumed == 30
        consumption = stocked_gateway.consume.call_args[0][0]
        assert consumption.quantity == 30
        assert consumption.storage_location == "X"
        assert consumption.consumption_date == "2025-03-02T15:00:00.000Z"

    async def test_exact_availability_allowed(self, stocked_gateway, reconstructor):
        stocked_gateway.consume.return_value = _result(20)
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        await use_case.execute(_request(quantity=20, storage_location="Y"))

        stocked_gateway.consume.assert_awaited_once()

    async def test_insufficient_at_location(self, stocked_gateway, reconstructor):
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.execute(_request(quantity=25, storage_location="Y"))

        assert exc_info.value.details["available"] == 20
        assert exc_info.value.details["storage_location"] == "Y"
        stocked_gateway.consume.assert_not_called()

    async def test_without_location_uses_every_location(self, stocked_gateway, reconstructor):
        stocked_gateway.consume.return_value = _result(55)
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        await use_case.execute(_request(quantity=55))

        stocked_gateway.consume.assert_awaited_once()

    async def test_other_units_do_not_count(self, stocked_gateway, reconstructor):
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        with pytest.raises(InsufficientStockError):
            await use_case.execute(_request(quantity=150, unit="g"))

    async def test_empty_log(self, mock_gateway, reconstructor):
        use_case = ConsumeInventoryUseCase(gateway=mock_gateway, reconstructor=reconstructor)

        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.execute(_request(quantity=1))

        assert exc_info.value.details["available"] == 0

    async def test_invalid_consumption_date(self, stocked_gateway, reconstructor):
        use_case = ConsumeInventoryUseCase(gateway=stocked_gateway, reconstructor=reconstructor)

        with pytest.raises(ValidationError):
            await use_case.execute(_request(consumption_date="02/03/2025"))

        stocked_gateway.list_movements.assert_not_called()

    def test_to_response(self):
        response = ConsumeInventoryUseCase().to_response(_result(30))
        assert response.batch_details[0].inventory_id == "r1"
        assert response.movement_ids == ["mv-1"]
