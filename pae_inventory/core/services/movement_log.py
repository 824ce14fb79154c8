"""
Movement log views.

Filtering, per-type counts and quantity summaries over the visible
movement log of one product. SYSTEM movements never appear here.
"""

from collections.abc import Iterable
from datetime import date

from pydantic import BaseModel

from pae_inventory.core.entities.inventory import (
    InventoryMovement,
    MovementCounts,
    MovementType,
    StockSummary,
)
from pae_inventory.core.services.colombian_time import colombian_date
from pae_inventory.core.services.stock_reconstructor import (
    matches_location_filter,
    reconstruct_stock,
)


class MovementLogFilter(BaseModel):
    """Dashboard filters for the movement log. Unset fields match everything."""

    search: str | None = None
    movement_type: MovementType | None = None
    institution_id: int | None = None
    date_from: date | None = None  # Colombian calendar date, inclusive
    date_to: date | None = None  # Colombian calendar date, inclusive


def visible_movements(movements: Iterable[InventoryMovement]) -> list[InventoryMovement]:
    """Movements shown to users, newest first."""
    return sorted(
        (m for m in movements if not m.is_system),
        key=lambda m: m.movement_date,
        reverse=True,
    )


def _matches_search(movement: InventoryMovement, term: str) -> bool:
    haystack = (movement.product_id, movement.notes, movement.lot)
    return any(term in field.lower() for field in haystack if field)


def filter_movements(
    movements: Iterable[InventoryMovement],
    log_filter: MovementLogFilter | None = None,
) -> list[InventoryMovement]:
    """Visible movements matching every set filter, newest first."""
    result = visible_movements(movements)
    if log_filter is None:
        return result

    term = (log_filter.search or "").strip().lower()
    if term:
        result = [m for m in result if _matches_search(m, term)]

    if log_filter.movement_type is not None:
        result = [m for m in result if m.movement_type == log_filter.movement_type]

    if log_filter.institution_id is not None:
        result = [m for m in result if m.institution_id == log_filter.institution_id]

    if log_filter.date_from is not None:
        result = [m for m in result if colombian_date(m.movement_date) >= log_filter.date_from]

    if log_filter.date_to is not None:
        result = [m for m in result if colombian_date(m.movement_date) <= log_filter.date_to]

    return result


def count_movements(movements: Iterable[InventoryMovement]) -> MovementCounts:
    counts = MovementCounts()
    for movement in movements:
        if movement.is_system:
            continue
        if movement.movement_type == MovementType.RECEIPT:
            counts.receipts += 1
        elif movement.movement_type == MovementType.USAGE:
            counts.usages += 1
        elif movement.movement_type == MovementType.ADJUSTMENT:
            counts.adjustments += 1
        elif movement.movement_type == MovementType.EXPIRED:
            counts.expired += 1
        elif movement.movement_type == MovementType.LOSS:
            counts.losses += 1
    return counts


def summarize_stock(
    movements: Iterable[InventoryMovement],
    product_id: str,
    institution_id: int,
    storage_location: str | None = None,
) -> StockSummary:
    """
    Per-type quantity totals plus the current reconstructed stock.

    Removals are reported as positive magnitudes; ``total_adjusted`` is the
    signed net of all adjustments.
    """
    movements = list(movements)
    scoped = [
        m
        for m in movements
        if not m.is_system and matches_location_filter(m, storage_location)
    ]
    snapshot = reconstruct_stock(movements, product_id, institution_id, storage_location)

    summary = StockSummary(
        product_id=product_id,
        institution_id=institution_id,
        storage_location=storage_location,
        current_stock=snapshot.total_available,
        unit=snapshot.unit,
        movements_count=len(scoped),
    )
    for movement in scoped:
        quantity = movement.quantity
        if movement.movement_type == MovementType.RECEIPT:
            summary.total_received += quantity
        elif movement.movement_type == MovementType.USAGE:
            summary.total_used += abs(quantity)
        elif movement.movement_type == MovementType.EXPIRED:
            summary.total_expired += abs(quantity)
        elif movement.movement_type == MovementType.LOSS:
            summary.total_lost += abs(quantity)
        elif movement.movement_type == MovementType.ADJUSTMENT:
            summary.total_adjusted += quantity

    if scoped:
        summary.last_movement_date = max(m.movement_date for m in scoped)
    return summary
