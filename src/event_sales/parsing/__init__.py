"""Low-level export parsing: line tokenizing, header resolution, numeric fields."""

from .numbers import parse_amount, parse_quantity
from .schema import REQUIRED_COLUMNS, ColumnSchema, resolve_schema
from .tokenizer import split_lines, tokenize_line

__all__ = [
    "REQUIRED_COLUMNS",
    "ColumnSchema",
    "parse_amount",
    "parse_quantity",
    "resolve_schema",
    "split_lines",
    "tokenize_line",
]
