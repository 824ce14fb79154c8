"""Infrastructure layer implementations."""

from pae_inventory.infrastructure import purchases

__all__ = ["purchases"]
