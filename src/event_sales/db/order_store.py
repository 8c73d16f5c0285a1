from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import psycopg2

from ..models.config_models import DatabaseConfig

"""Raw export storage (PostgreSQL via psycopg2).

The store keeps the raw export text and the record count per city. It never
sees parsed records; uploads are reparsed on load.

Transactions are owned by the caller: functions here only execute statements
on the given cursor.
"""

__all__ = [
    "StoreError",
    "StoredUpload",
    "CREATE_TABLE_SQL",
    "resolve_dsn",
    "db_connection",
    "ensure_schema",
    "replace_city_upload",
    "fetch_latest_upload",
]

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS order_data (
  id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
  csv_content text NOT NULL,
  order_count integer DEFAULT 0,
  file_name text,
  city text DEFAULT 'dc',
  created_at timestamptz DEFAULT now(),
  updated_at timestamptz DEFAULT now()
);
CREATE INDEX IF NOT EXISTS idx_order_data_created_at ON order_data(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_order_data_city ON order_data(city);
"""


class StoreError(Exception):
    pass


@dataclass(frozen=True)
class StoredUpload:
    csv_content: str
    order_count: int
    file_name: str | None
    city: str
    created_at: Any


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    """Build the connection DSN.

    Priority:
        1. DATABASE_URL / PGDSN (whole DSN)
        2. database.dsn from config
        3. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE, falling back
           per key to the config's database section
    """
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def db_connection(db_cfg: DatabaseConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Yield a cursor inside one transaction; commit on success, rollback on error."""
    try:
        conn = psycopg2.connect(resolve_dsn(db_cfg))
    except psycopg2.Error as e:
        raise StoreError(f"database connection failed: {e}") from e
    try:
        with conn:  # commits / rolls back
            with conn.cursor() as cur:
                yield cur
    except psycopg2.Error as e:
        raise StoreError(f"database error: {e}") from e
    finally:
        conn.close()


def ensure_schema(cursor: Any) -> None:
    cursor.execute(CREATE_TABLE_SQL)


def replace_city_upload(
    cursor: Any,
    *,
    city: str,
    csv_text: str,
    order_count: int,
    file_name: str | None = None,
) -> None:
    """Replace whatever is stored for a city with a new raw export."""
    cursor.execute("DELETE FROM order_data WHERE city = %s", (city,))
    cursor.execute(
        "INSERT INTO order_data (csv_content, order_count, file_name, city) "
        "VALUES (%s, %s, %s, %s)",
        (csv_text, order_count, file_name, city),
    )


def fetch_latest_upload(cursor: Any, city: str) -> StoredUpload | None:
    """Most recent upload for a city, or None."""
    cursor.execute(
        "SELECT csv_content, order_count, file_name, city, created_at "
        "FROM order_data WHERE city = %s ORDER BY created_at DESC LIMIT 1",
        (city,),
    )
    row = cursor.fetchone()
    if row is None:
        return None
    csv_content, order_count, file_name, row_city, created_at = row
    return StoredUpload(
        csv_content=csv_content,
        order_count=order_count or 0,
        file_name=file_name,
        city=row_city,
        created_at=created_at,
    )
