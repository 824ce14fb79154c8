"""Core interfaces (ports) for dependency injection."""

from pae_inventory.core.interfaces.movement_gateway import IInventoryMovementGateway

__all__ = [
    "IInventoryMovementGateway",
]
