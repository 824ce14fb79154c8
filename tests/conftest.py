"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from pae_inventory.application.services import reset_services
from pae_inventory.config import reset_settings
from pae_inventory.core.entities import InventoryMovement, MovementType

# Noon in Bogota on the first day of every fixture log
BASE_DATE = datetime(2025, 3, 1, 17, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    """Fresh settings and service singletons for every test."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def make_movement() -> Callable[..., InventoryMovement]:
    """Factory for movements on product P-001, institution 1, unit kg, location X.

    ``day`` offsets the movement date from BASE_DATE. Ids are generated
    in call order unless given.
    """
    ids = count(1)

    def _make(
        movement_type: MovementType | str,
        quantity: float,
        *,
        id: str | None = None,
        day: float = 0,
        unit: str = "kg",
        location: str | None = "X",
        lot: str | None = None,
        reference_id: str | None = None,
        reason: str | None = None,
        notes: str | None = None,
        product_id: str = "P-001",
        institution_id: int = 1,
    ) -> InventoryMovement:
        return InventoryMovement(
            id=id or f"m{next(ids)}",
            movement_type=MovementType(movement_type),
            product_id=product_id,
            institution_id=institution_id,
            storage_location=location,
            quantity=quantity,
            unit=unit,
            lot=lot,
            reference_id=reference_id,
            movement_date=BASE_DATE + timedelta(days=day),
            reason=reason,
            notes=notes,
        )

    return _make


@pytest.fixture
def movement_payload() -> Callable[..., dict]:
    """Factory for raw movement JSON as the purchases backend returns it."""

    def _payload(**overrides) -> dict:
        payload = {
            "_id": "665f1c2e9a1b2c3d4e5f6789",
            "movement_type": "receipt",
            "product_id": "P-001",
            "institution_id": 1,
            "storage_location": "Bodega principal",
            "quantity": 100,
            "unit": "kg",
            "lot": "L-2025-01",
            "expiration_date": "2025-09-30T00:00:00",
            "reference_id": "INV-001",
            "reference_type": "inventory",
            "movement_date": "2025-03-01T17:00:00",
            "notes": "Compra mensual",
            "reason": None,
            "created_by": "bodeguero",
            "created_at": "2025-03-01T17:00:05",
        }
        payload.update(overrides)
        return payload

    return _payload
