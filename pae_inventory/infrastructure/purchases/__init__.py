"""Purchases backend client."""

from pae_inventory.infrastructure.purchases.client import PurchasesAPIClient

__all__ = ["PurchasesAPIClient"]
