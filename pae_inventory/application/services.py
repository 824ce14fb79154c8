"""
Service factory functions for dependency injection.

Wires infrastructure implementations to the ports the use cases need.
Use cases import from here instead of constructing clients themselves.
"""

from typing import TYPE_CHECKING

from pae_inventory.core.services import StockReconstructor

if TYPE_CHECKING:
    from pae_inventory.core.interfaces import IInventoryMovementGateway


# Singleton instances
_movement_gateway: "IInventoryMovementGateway | None" = None
_stock_reconstructor: StockReconstructor | None = None


def get_movement_gateway() -> "IInventoryMovementGateway":
    """
    Get or create the movement gateway.

    Backed by the purchases backend client configured from
    ``PURCHASES_API_*`` settings.
    """
    global _movement_gateway

    if _movement_gateway is None:
        # Lazy import infrastructure to avoid circular imports
        from pae_inventory.infrastructure.purchases import PurchasesAPIClient

        _movement_gateway = PurchasesAPIClient()
    return _movement_gateway


def get_stock_reconstructor() -> StockReconstructor:
    """Get or create the stock reconstructor."""
    global _stock_reconstructor

    if _stock_reconstructor is None:
        _stock_reconstructor = StockReconstructor()
    return _stock_reconstructor


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _movement_gateway
    global _stock_reconstructor

    _movement_gateway = None
    _stock_reconstructor = None


__all__ = [
    "get_movement_gateway",
    "get_stock_reconstructor",
    "reset_services",
]
