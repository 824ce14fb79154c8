"""
Stock Reconstructor.

Derives the available stock of one product, split into FIFO-ordered
batches, purely from its raw movement log. Nothing is cached: every call
replays the whole log, so the result can never drift from the events.

Passes, in order:
1. drop SYSTEM movements and movements outside the location filter
2. seed one batch per receipt
3. total the consumption demand per (unit, storage location)
4. spend that demand oldest batch first, never below zero
5. apply positive adjustments to a matching batch or a new one
6. keep batches with stock left and total them
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from pae_inventory.config import get_logger
from pae_inventory.core.entities.inventory import (
    DEFAULT_UNIT,
    UNSPECIFIED_LOCATION,
    InventoryBatch,
    InventoryMovement,
    MovementType,
    StockSnapshot,
    normalize_location,
)

logger = get_logger(__name__)

# Prefix for batches created by a positive adjustment that matched nothing.
SYNTHETIC_BATCH_PREFIX = "adj-"

# Float residue below this is treated as zero.
_EPSILON = 1e-9

GroupKey = tuple[str, str | None]


@dataclass
class _BatchState:
    """Mutable batch used while replaying the log."""

    inventory_id: str
    lot: str | None
    unit: str
    storage_location: str | None
    institution_id: int
    expiration_date: datetime | None
    date_of_admission: datetime
    available_quantity: float

    @classmethod
    def from_movement(cls, movement: InventoryMovement, inventory_id: str) -> _BatchState:
        return cls(
            inventory_id=inventory_id,
            lot=movement.lot,
            unit=movement.unit,
            storage_location=movement.storage_location,
            institution_id=movement.institution_id,
            expiration_date=movement.expiration_date,
            date_of_admission=movement.movement_date,
            available_quantity=movement.quantity,
        )

    @property
    def group_key(self) -> GroupKey:
        return (self.unit, normalize_location(self.storage_location))

    @property
    def fifo_key(self) -> tuple[datetime, str]:
        return (self.date_of_admission, self.inventory_id)

    def matches(self, movement: InventoryMovement) -> bool:
        """Same unit, location and lot as the movement."""
        return (
            self.unit == movement.unit
            and normalize_location(self.storage_location) == movement.location_key
            and self.lot == movement.lot
        )

    def freeze(self) -> InventoryBatch:
        return InventoryBatch(
            inventory_id=self.inventory_id,
            lot=self.lot,
            available_quantity=self.available_quantity,
            unit=self.unit,
            storage_location=self.storage_location,
            institution_id=self.institution_id,
            expiration_date=self.expiration_date,
            date_of_admission=self.date_of_admission,
        )


def matches_location_filter(
    movement: InventoryMovement, storage_location: str | None
) -> bool:
    """Match on the same normalized key used for demand grouping.

    Unlocated movements only match the explicit unspecified filter; a
    blank filter is no filter.
    """
    wanted = normalize_location(storage_location)
    if wanted is None:
        return True
    if movement.location_key == wanted:
        return True
    return wanted == UNSPECIFIED_LOCATION and movement.location_key is None


class StockReconstructor:
    """
    Layer-pure, stateless service turning a movement log into a StockSnapshot.

    Total over its input: inconsistent logs (duplicate receipts, demand
    above supply, missing lots or locations) resolve through fixed
    fallback rules and never raise.
    """

    def reconstruct(
        self,
        movements: Iterable[InventoryMovement],
        product_id: str,
        institution_id: int,
        storage_location: str | None = None,
    ) -> StockSnapshot:
        """
        Rebuild current stock for one product.

        Args:
            movements: Movement log in any order; input order only breaks
                ties between receipts sharing an inventory id.
            product_id: Product the log belongs to.
            institution_id: Site the log belongs to.
            storage_location: Optional location filter, compared after
                stripping whitespace. Pass ``"unspecified"`` to select
                movements with no location.

        Returns:
            Snapshot holding only batches with stock left.
        """
        relevant = [
            m
            for m in movements
            if not m.is_system and matches_location_filter(m, storage_location)
        ]

        batches = self._seed_batches(relevant)
        demand = self._aggregate_demand(relevant)
        self._consume_fifo(batches, demand, product_id)
        self._apply_positive_adjustments(batches, relevant)

        snapshot = self._finalize(batches, product_id, institution_id)
        logger.debug(
            "stock_reconstructed",
            product_id=product_id,
            institution_id=institution_id,
            storage_location=storage_location,
            movements=len(relevant),
            batches=len(snapshot.batches),
            total_available=snapshot.total_available,
        )
        return snapshot

    @staticmethod
    def _seed_batches(movements: list[InventoryMovement]) -> list[_BatchState]:
        """One batch per receipt; a later receipt with the same id replaces an earlier one."""
        seeded: dict[str, _BatchState] = {}
        for movement in movements:
            if movement.movement_type != MovementType.RECEIPT:
                continue
            inventory_id = movement.reference_id or movement.id
            seeded[inventory_id] = _BatchState.from_movement(movement, inventory_id)
        return list(seeded.values())

    @staticmethod
    def _aggregate_demand(movements: list[InventoryMovement]) -> dict[GroupKey, float]:
        demand: dict[GroupKey, float] = defaultdict(float)
        for movement in movements:
            if movement.is_consumption:
                demand[(movement.unit, movement.location_key)] += abs(movement.quantity)
        return demand

    @staticmethod
    def _consume_fifo(
        batches: list[_BatchState],
        demand: dict[GroupKey, float],
        product_id: str,
    ) -> None:
        """Spend each group's demand oldest batch first, flooring every batch at zero."""
        for key, total_demand in demand.items():
            if total_demand <= 0:
                continue

            group = sorted(
                (b for b in batches if b.group_key == key),
                key=lambda b: b.fifo_key,
            )
            remaining = total_demand
            for batch in group:
                if remaining <= _EPSILON:
                    break
                taken = min(remaining, max(batch.available_quantity, 0.0))
                batch.available_quantity -= taken
                remaining -= taken

            # Unmet demand is dropped, not carried into later passes.
            if remaining > _EPSILON:
                unit, location = key
                logger.warning(
                    "stock_consumption_shortfall",
                    product_id=product_id,
                    unit=unit,
                    storage_location=location,
                    demand=total_demand,
                    unmet=remaining,
                )

    @staticmethod
    def _apply_positive_adjustments(
        batches: list[_BatchState], movements: list[InventoryMovement]
    ) -> None:
        for movement in movements:
            if not movement.is_positive_adjustment:
                continue

            # Oldest matching batch, independent of input order
            target = next(
                (b for b in sorted(batches, key=lambda b: b.fifo_key) if b.matches(movement)),
                None,
            )
            if target is not None:
                target.available_quantity += movement.quantity
                continue

            inventory_id = movement.reference_id or f"{SYNTHETIC_BATCH_PREFIX}{movement.id}"
            batches.append(_BatchState.from_movement(movement, inventory_id))

    @staticmethod
    def _finalize(
        batches: list[_BatchState], product_id: str, institution_id: int
    ) -> StockSnapshot:
        retained = sorted(
            (b for b in batches if b.available_quantity > _EPSILON),
            key=lambda b: b.fifo_key,
        )
        if not retained:
            return StockSnapshot.empty(product_id, institution_id)

        # most_common keeps first-encountered order among equal counts
        unit = Counter(b.unit for b in retained).most_common(1)[0][0]

        return StockSnapshot(
            product_id=product_id,
            institution_id=institution_id,
            total_available=sum(b.available_quantity for b in retained),
            unit=unit or DEFAULT_UNIT,
            batches=[b.freeze() for b in retained],
        )


def reconstruct_stock(
    movements: Iterable[InventoryMovement],
    product_id: str,
    institution_id: int,
    storage_location: str | None = None,
) -> StockSnapshot:
    """Shorthand for ``StockReconstructor().reconstruct(...)``."""
    return StockReconstructor().reconstruct(
        movements, product_id, institution_id, storage_location
    )
