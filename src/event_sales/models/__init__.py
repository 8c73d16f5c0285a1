"""Domain models for the event sales reconciliation engine.

Records produced by the engine are frozen dataclasses; consumers read them
but never mutate them.
"""

from .config_models import AppConfig, DatabaseConfig
from .order_snapshot import OrderSnapshot
from .parse_result import ParseResult, SkipReason
from .parsed_order import ParsedOrder
from .skip_record import SkipRecord

__all__ = [
    # Configuration models
    "AppConfig",
    "DatabaseConfig",
    # Engine models
    "OrderSnapshot",
    "ParsedOrder",
    "ParseResult",
    "SkipReason",
    "SkipRecord",
]
