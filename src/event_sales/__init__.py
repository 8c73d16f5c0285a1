"""Order reconciliation and parsing engine for event sales exports."""

from .errors import EventSalesError
from .services.allocation import allocate_revenue
from .services.class_names import clean_class_name
from .services.reconciler import parse_orders, reconcile

__all__ = [
    "EventSalesError",
    "allocate_revenue",
    "clean_class_name",
    "parse_orders",
    "reconcile",
]

__version__ = "0.1.0"
