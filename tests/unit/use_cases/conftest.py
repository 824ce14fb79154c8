"""Shared fixtures for use case tests."""

from unittest.mock import AsyncMock

import pytest

from pae_inventory.core.services import StockReconstructor


@pytest.fixture
def mock_gateway():
    """Movement gateway whose log is empty unless a test sets one."""
    gateway = AsyncMock()
    gateway.list_movements.return_value = []
    return gateway


@pytest.fixture
def reconstructor():
    return StockReconstructor()
