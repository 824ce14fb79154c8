"""Tests for ReceiveInventoryUseCase."""

import pytest

from pae_inventory.application.dto.requests import ReceiveInventoryRequest
from pae_inventory.application.use_cases.receive_inventory import ReceiveInventoryUseCase
from pae_inventory.core.entities import InventoryReceiptResult
from pae_inventory.core.exceptions import PurchasesAPIUnavailableError, ValidationError


def _request(**overrides) -> ReceiveInventoryRequest:
    data = {
        "product_id": "P-001",
        "storage_location": "Bodega principal",
        "quantity_received": 100,
        "unit_of_measure": "kg",
        "expiration_date": "2025-09-30",
        "batch_number": "L-2025-01",
        "received_by": "bodeguero",
        "reception_date": "2025-03-01T08:30",
    }
    data.update(overrides)
    return ReceiveInventoryRequest(**data)


@pytest.fixture
def receipt_result():
    return InventoryReceiptResult(
        transaction_id="tx-1",
        inventory_id="INV-001",
        product_id="P-001",
        institution_id=1,
        storage_location="Bodega principal",
        quantity_received=100,
        unit_of_measure="kg",
        expiration_date="2025-09-30",
        batch_number="L-2025-01",
        movement_id="mv-1",
    )


class TestReceiveInventoryUseCase:
    async def test_forwards_receipt_with_utc_dates(self, mock_gateway, receipt_result):
        mock_gateway.receive.return_value = receipt_result
        use_case = ReceiveInventoryUseCase(gateway=mock_gateway)

        result = await use_case.execute(_request(expiration_date="2025-10-01T03:00:00Z"))

        assert result.inventory_id == "INV-001"
        receipt = mock_gateway.receive.call_args[0][0]
        assert receipt.reception_date == "2025-03-01T13:30:00.000Z"
        assert receipt.expiration_date == "2025-09-30"
        assert receipt.institution_id == 1
        assert receipt.quantity_received == 100

    async def test_explicit_institution(self, mock_gateway, receipt_result):
        mock_gateway.receive.return_value = receipt_result
        use_case = ReceiveInventoryUseCase(gateway=mock_gateway)

        await use_case.execute(_request(institution_id=4))

        assert mock_gateway.receive.call_args[0][0].institution_id == 4

    async def test_missing_reception_date_is_now(self, mock_gateway, receipt_result):
        mock_gateway.receive.return_value = receipt_result
        use_case = ReceiveInventoryUseCase(gateway=mock_gateway)

        await use_case.execute(_request(reception_date=None))

        assert mock_gateway.receive.call_args[0][0].reception_date.endswith("Z")

    async def test_invalid_reception_date(self, mock_gateway):
        use_case = ReceiveInventoryUseCase(gateway=mock_gateway)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_request(reception_date="mañana"))

        assert exc_info.value.details["field"] == "reception_date"
        mock_gateway.receive.assert_not_called()

    async def test_provider_failure_propagates(self, mock_gateway):
        mock_gateway.receive.side_effect = PurchasesAPIUnavailableError("receive", "HTTP 503")
        use_case = ReceiveInventoryUseCase(gateway=mock_gateway)

        with pytest.raises(PurchasesAPIUnavailableError):
            await use_case.execute(_request())

    def test_to_response(self, receipt_result):
        response = ReceiveInventoryUseCase().to_response(receipt_result)
        assert response.movement_id == "mv-1"
        assert response.batch_number == "L-2025-01"
