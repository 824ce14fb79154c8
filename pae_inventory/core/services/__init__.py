"""Pure domain services: stock reconstruction, movement log views, dates."""

from pae_inventory.core.services.colombian_time import (
    COLOMBIA_TZ,
    colombian_date,
    colombian_to_utc,
    current_colombian_date,
    to_date_only,
    to_utc_iso,
)
from pae_inventory.core.services.movement_log import (
    MovementLogFilter,
    count_movements,
    filter_movements,
    summarize_stock,
    visible_movements,
)
from pae_inventory.core.services.stock_reconstructor import (
    SYNTHETIC_BATCH_PREFIX,
    StockReconstructor,
    matches_location_filter,
    reconstruct_stock,
)

__all__ = [
    # Stock reconstruction
    "StockReconstructor",
    "reconstruct_stock",
    "matches_location_filter",
    "SYNTHETIC_BATCH_PREFIX",
    # Movement log
    "MovementLogFilter",
    "visible_movements",
    "filter_movements",
    "count_movements",
    "summarize_stock",
    # Colombian time
    "COLOMBIA_TZ",
    "colombian_date",
    "colombian_to_utc",
    "current_colombian_date",
    "to_date_only",
    "to_utc_iso",
]
