# Shared pytest fixtures
from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest

from event_sales.logging.init import LOGGER_NAME, reset_logging

DC = "Ebony Fit Weekend - DC"
ATLANTA = "Ebony Fit Weekend - Atlanta"

HEADER = [
    "Order date",
    "Order time",
    "Internal order id",
    "Status",
    "Source name",
    "Customer name",
    "Customer email",
    "Customer phone",
    "Line item Name",
    "Line item Quantity",
    "Line item Price",
    "Line item Subtotal",
    "Sub total",
    "Tax Amount",
    "Total Amount",
]

# logical shorthand -> header column
_KEYS = {
    "date": "Order date",
    "time": "Order time",
    "order_id": "Internal order id",
    "status": "Status",
    "source": "Source name",
    "name": "Customer name",
    "email": "Customer email",
    "phone": "Customer phone",
    "item": "Line item Name",
    "qty": "Line item Quantity",
    "price": "Line item Price",
    "line_subtotal": "Line item Subtotal",
    "sub_total": "Sub total",
    "tax": "Tax Amount",
    "total": "Total Amount",
}


def _quote(value: str) -> str:
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def csv_line(fields: list[str]) -> str:
    return ",".join(_quote(f) for f in fields)


def build_row(**values: str) -> str:
    cells = {_KEYS[k]: v for k, v in values.items()}
    return csv_line([cells.get(h, "") for h in HEADER])


def primary_row(order_id: str, **overrides: str) -> str:
    """A full first row of an order (DC, completed, with customer identity)."""
    values = {
        "date": "2025-09-06",
        "time": "09:15",
        "order_id": order_id,
        "status": "Completed",
        "source": DC,
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "item": "SPIN CLASS",
        "qty": "1",
        "price": "$30.00",
        "line_subtotal": "$30.00",
        "sub_total": "$30.00",
        "tax": "$3.00",
        "total": "$33.00",
    }
    values.update(overrides)
    return build_row(**values)


def continuation_row(order_id: str, item: str, qty: str, price: str, line_subtotal: str) -> str:
    """A follow-up line item row: only order id and line item fields are set."""
    return build_row(order_id=order_id, item=item, qty=qty, price=price, line_subtotal=line_subtotal)


@pytest.fixture()
def make_export() -> Callable[..., str]:
    def _make(*rows: str, header: list[str] | None = None) -> str:
        return "\n".join([csv_line(header or HEADER), *rows]) + "\n"
    return _make


@pytest.fixture()
def sample_export(make_export) -> str:
    """Mixed export: multi-item DC order, foreign city, refund, short row, etc."""
    return make_export(
        primary_row(
            "1001",
            item="ONLY YAMS - ONLY YAMS",
            price="$30.00",
            line_subtotal="$30.00",
            sub_total="$80.00",
            tax="$8.00",
            total="$88.00",
        ),
        continuation_row("1001", "TRAP MOBILITY @ 24", "1", "$50.00", "$50.00"),
        primary_row("1002", source=ATLANTA, name="John Roe", email="john@example.com"),
        primary_row("1003", status="Refunded"),
        primary_row(
            "1004",
            status="COMPLETED",
            name="Amy Poe",
            email="amy@example.com",
            item="PILATES - TIGHT & TONE - PILATES - TIGHT & TONE",
            qty="2",
            price="$25.00",
            line_subtotal="$50.00",
            sub_total="$50.00",
            tax="$0.00",
            total="$50.00",
        ),
        primary_row("1005", email=""),
        "garbage",
    )


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """cities:
  dc: "Ebony Fit Weekend - DC"
  atlanta: "Ebony Fit Weekend - Atlanta"
completed_status: completed
max_upload_bytes: 1048576
database:
  host: dbhost
  port: 5433
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "event_sales.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def export_rows() -> SimpleNamespace:
    """Row builders for hand-written exports."""
    return SimpleNamespace(
        header=HEADER,
        line=csv_line,
        build=build_row,
        primary=primary_row,
        continuation=continuation_row,
        DC=DC,
        ATLANTA=ATLANTA,
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
    # handlers keep a reference to the (captured) stdout of the finished test
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
