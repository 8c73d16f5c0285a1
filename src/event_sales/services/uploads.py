from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..db.order_store import fetch_latest_upload, replace_city_upload
from ..errors import CityValidationError, UnknownCityError, UploadTooLargeError
from ..models.config_models import AppConfig
from ..models.parse_result import ParseResult
from .reconciler import reconcile

logger = logging.getLogger(__name__)

"""Upload / load flow around the engine.

The engine never decides whether an export is the "right file" for a city;
that check lives here, after parsing: an upload for a city must yield at least
one record carrying the city's source label.
"""

__all__ = [
    "UploadOutcome",
    "LoadedExport",
    "check_size",
    "ensure_city_records",
    "upload_export",
    "load_latest",
]


@dataclass(frozen=True)
class UploadOutcome:
    city: str
    file_name: str | None
    record_count: int
    result: ParseResult


@dataclass(frozen=True)
class LoadedExport:
    city: str
    file_name: str | None
    created_at: Any  # datetime from the driver
    result: ParseResult


def check_size(text: str, config: AppConfig) -> None:
    """Raise UploadTooLargeError when the UTF-8 payload exceeds the ceiling."""
    size = len(text.encode("utf-8"))
    if size > config.max_upload_bytes:
        raise UploadTooLargeError(size, config.max_upload_bytes)


def ensure_city_records(result: ParseResult, city: str, config: AppConfig) -> None:
    """Raise CityValidationError unless some record belongs to the city."""
    try:
        expected = config.source_label(city)
    except KeyError:
        raise UnknownCityError(city) from None
    if not any(r.source_name == expected for r in result.records):
        raise CityValidationError(city, expected)


def _parse(text: str, city: str, config: AppConfig) -> ParseResult:
    return reconcile(
        text, city, cities=config.cities, completed_status=config.completed_status
    )


def upload_export(
    cursor: Any,
    text: str,
    city: str,
    config: AppConfig,
    file_name: str | None = None,
) -> UploadOutcome:
    """Validate an export for a city and replace the city's stored upload.

    Nothing is written unless size, schema and city checks all pass.

    Raises:
        UploadTooLargeError, SchemaError, UnknownCityError, CityValidationError
    """
    check_size(text, config)
    result = _parse(text, city, config)
    ensure_city_records(result, city, config)
    replace_city_upload(
        cursor, city=city, csv_text=text, order_count=len(result.records), file_name=file_name
    )
    logger.info(f"stored upload city={city} records={len(result.records)} file={file_name}")
    return UploadOutcome(
        city=city, file_name=file_name, record_count=len(result.records), result=result
    )


def load_latest(cursor: Any, city: str, config: AppConfig) -> LoadedExport | None:
    """Reparse the most recent stored upload for a city (None when nothing stored)."""
    stored = fetch_latest_upload(cursor, city)
    if stored is None:
        logger.info(f"no stored upload for city={city}")
        return None
    return LoadedExport(
        city=city,
        file_name=stored.file_name,
        created_at=stored.created_at,
        result=_parse(stored.csv_content, city, config),
    )
