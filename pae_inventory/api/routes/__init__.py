"""API route modules."""

from pae_inventory.api.routes.health import router as health_router
from pae_inventory.api.routes.inventory import router as inventory_router

__all__ = [
    "health_router",
    "inventory_router",
]
