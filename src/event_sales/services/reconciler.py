from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..errors import UnknownCityError
from ..models.config_models import DEFAULT_CITIES, DEFAULT_COMPLETED_STATUS
from ..models.order_snapshot import OrderSnapshot
from ..models.parse_result import ParseResult, SkipReason
from ..models.parsed_order import ParsedOrder
from ..models.skip_record import SkipRecord
from ..parsing.numbers import parse_amount, parse_quantity
from ..parsing.schema import ColumnSchema, resolve_schema
from ..parsing.tokenizer import split_lines, tokenize_line
from .class_names import clean_class_name

logger = logging.getLogger(__name__)

"""Order reconciliation: raw export text -> city scoped line item records.

Multi-item orders span several physical rows. Only the order's primary row is
guaranteed to carry status, customer identity and order totals; continuation
rows may leave them blank. Reconciliation therefore runs in two passes:

1. qualify  - decide which order ids belong to the requested city and are
              completed, and snapshot each order's totals (first row wins)
2. emit     - one ParsedOrder per line item of a qualifying order, with
              customer identity backfilled from the order's primary row

Nothing is retained between calls.
"""

__all__ = [
    "parse_orders",
    "reconcile",
]


@dataclass(frozen=True)
class _Identity:
    """Customer fields of an order's primary row (first row with a customer name)."""
    name: str
    email: str
    phone: str
    status: str
    order_date: str
    order_time: str


def _accepted_sources(city: str | None, cities: Mapping[str, str]) -> frozenset[str]:
    if city is None:
        return frozenset(cities.values())
    try:
        return frozenset({cities[city]})
    except KeyError:
        raise UnknownCityError(city) from None


def _disqualification(
    values: Sequence[str],
    schema: ColumnSchema,
    sources: frozenset[str],
    completed_status: str,
) -> str | None:
    """Return why a well-formed row cannot qualify its order, or None if it does."""
    if not schema.get(values, "order_id"):
        return SkipReason.MISSING_ORDER_ID
    source_name = schema.get(values, "source_name")
    if not source_name:
        return SkipReason.MISSING_SOURCE
    if source_name not in sources:
        return SkipReason.SOURCE_MISMATCH
    if schema.get(values, "status").lower() != completed_status:
        return SkipReason.STATUS_NOT_COMPLETED
    return None


def _qualify(
    rows: Sequence[tuple[int, list[str]]],
    schema: ColumnSchema,
    sources: frozenset[str],
    completed_status: str,
) -> dict[str, OrderSnapshot]:
    """Pass 1. Returns qualifying order id -> snapshot (insertion ordered)."""
    snapshots: dict[str, OrderSnapshot] = {}
    for _, values in rows:
        if not schema.fits(values):
            continue
        if _disqualification(values, schema, sources, completed_status) is not None:
            continue
        order_id = schema.get(values, "order_id")
        if order_id not in snapshots:
            snapshots[order_id] = OrderSnapshot(
                order_sub_total=parse_amount(schema.get(values, "order_sub_total")),
                order_tax_amount=parse_amount(schema.get(values, "order_tax_amount")),
                order_total_amount=parse_amount(schema.get(values, "order_total_amount")),
                source_name=schema.get(values, "source_name"),
            )
    return snapshots


def _index_identities(
    rows: Sequence[tuple[int, list[str]]], schema: ColumnSchema
) -> dict[str, _Identity]:
    """Map order id -> identity of the first row carrying a customer name."""
    identities: dict[str, _Identity] = {}
    for _, values in rows:
        if not schema.fits(values):
            continue
        order_id = schema.get(values, "order_id")
        name = schema.get(values, "customer_name")
        if not order_id or not name or order_id in identities:
            continue
        identities[order_id] = _Identity(
            name=name,
            email=schema.get(values, "customer_email"),
            phone=schema.get(values, "customer_phone"),
            status=schema.get(values, "status"),
            order_date=schema.get(values, "order_date"),
            order_time=schema.get(values, "order_time"),
        )
    return identities


def _emit(
    rows: Sequence[tuple[int, list[str]]],
    schema: ColumnSchema,
    snapshots: Mapping[str, OrderSnapshot],
    sources: frozenset[str],
    completed_status: str,
    skipped: list[SkipRecord],
) -> list[ParsedOrder]:
    """Pass 2. One record per line item of a qualifying order.

    Every row that does not produce a record gets exactly one SkipRecord.
    """
    identities = _index_identities(rows, schema)
    records: list[ParsedOrder] = []
    for line_no, values in rows:
        if not schema.fits(values):
            skipped.append(SkipRecord(line_no, "", SkipReason.SHORT_ROW))
            continue
        order_id = schema.get(values, "order_id")
        if not order_id:
            skipped.append(SkipRecord(line_no, "", SkipReason.MISSING_ORDER_ID))
            continue
        if order_id not in snapshots:
            reason = _disqualification(values, schema, sources, completed_status)
            skipped.append(SkipRecord(line_no, order_id, reason or SkipReason.NOT_QUALIFIED))
            continue
        class_name = schema.get(values, "class_name")
        if not class_name:
            skipped.append(SkipRecord(line_no, order_id, SkipReason.MISSING_CLASS_NAME))
            continue
        snapshot = snapshots.get(order_id)
        if snapshot is None:  # pragma: no cover - qualifying ids always have a snapshot
            skipped.append(SkipRecord(line_no, order_id, SkipReason.MISSING_SNAPSHOT))
            continue

        customer_name = schema.get(values, "customer_name")
        customer_email = schema.get(values, "customer_email")
        customer_phone = schema.get(values, "customer_phone")
        status = schema.get(values, "status")
        order_date = schema.get(values, "order_date")
        order_time = schema.get(values, "order_time")

        if not customer_name or not customer_email:
            primary = identities.get(order_id)
            if primary is not None:
                customer_name = primary.name
                customer_email = primary.email or customer_email
                customer_phone = primary.phone
                status = primary.status
                order_date = primary.order_date
                order_time = primary.order_time

        if not customer_name or not customer_email:
            skipped.append(SkipRecord(line_no, order_id, SkipReason.MISSING_CUSTOMER))
            continue

        records.append(
            ParsedOrder(
                order_id=order_id,
                customer_name=customer_name,
                customer_email=customer_email,
                customer_phone=customer_phone,
                status=status,
                source_name=snapshot.source_name,
                order_date=order_date,
                order_time=order_time,
                class_name=clean_class_name(class_name),
                quantity=parse_quantity(schema.get(values, "quantity")),
                price=parse_amount(schema.get(values, "price")),
                line_item_subtotal=parse_amount(schema.get(values, "line_item_subtotal")),
                order_sub_total=snapshot.order_sub_total,
                order_tax_amount=snapshot.order_tax_amount,
                order_total_amount=snapshot.order_total_amount,
            )
        )
    return records


def reconcile(
    text: str,
    city: str | None = None,
    *,
    cities: Mapping[str, str] | None = None,
    completed_status: str = DEFAULT_COMPLETED_STATUS,
) -> ParseResult:
    """Parse a raw export into city scoped line item records with diagnostics.

    Args:
        text: Whole export, header row first
        city: City key to scope to. None accepts every known city label.
        cities: City key -> exact source label (defaults to DEFAULT_CITIES)
        completed_status: Status that qualifies an order (case-insensitive)

    Returns:
        ParseResult with records in input row order and the rows skipped

    Raises:
        MissingColumnError: a required column is absent from the header
        UnknownCityError: city is not a key of ``cities`` (checked after the header)
    """
    start = time.perf_counter()
    city_map = DEFAULT_CITIES if cities is None else cities

    lines = split_lines(text)
    # header is the first non-blank line
    head = next((i for i, line in enumerate(lines) if line.strip()), 0)
    schema = resolve_schema(tokenize_line(lines[head].strip()))
    logger.debug(f"resolved columns: {dict(schema.indices)}")
    sources = _accepted_sources(city, city_map)
    if city is not None:
        logger.debug(f'filtering for source: "{city_map[city]}"')

    # 1-based physical line numbers
    rows = [(n, tokenize_line(line)) for n, line in enumerate(lines[head + 1:], start=head + 2)]

    status = completed_status.lower()
    snapshots = _qualify(rows, schema, sources, status)
    logger.debug(f"qualified orders: {len(snapshots)}")
    skipped: list[SkipRecord] = []
    records = _emit(rows, schema, snapshots, sources, status, skipped)

    result = ParseResult(
        records=records,
        city=city,
        data_rows=len(rows),
        qualified_orders=len(snapshots),
        skipped=skipped,
        elapsed_seconds=time.perf_counter() - start,
    )
    if skipped:
        counts = ", ".join(f"{k}={v}" for k, v in sorted(result.skip_counts.items()))
        logger.debug(f"skipped rows: {counts}")
    logger.debug(f"parsed records: {len(records)}")
    return result


def parse_orders(
    text: str,
    city: str | None = None,
    *,
    cities: Mapping[str, str] | None = None,
    completed_status: str = DEFAULT_COMPLETED_STATUS,
) -> list[ParsedOrder]:
    """Parse a raw export and return only the line item records.

    See reconcile() for arguments and errors.
    """
    return reconcile(text, city, cities=cities, completed_status=completed_status).records
