from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the event sales engine.

The loader in event_sales/config/loader.py builds these from YAML; the engine
itself only needs the city -> source label mapping, so every field has a
default and AppConfig() is usable without any file.
"""

__all__ = [
    "DEFAULT_CITIES",
    "DEFAULT_COMPLETED_STATUS",
    "DEFAULT_MAX_UPLOAD_BYTES",
    "DatabaseConfig",
    "AppConfig",
]

DEFAULT_CITIES: dict[str, str] = {
    "dc": "Ebony Fit Weekend - DC",
    "atlanta": "Ebony Fit Weekend - Atlanta",
    "houston": "Ebony Fit Weekend - Houston",
}
DEFAULT_COMPLETED_STATUS = "completed"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # dashboard upload ceiling (10MB)


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback.

    Environment variables (DATABASE_URL / PGDSN / PG*) take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    cities: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CITIES))  # city key -> source label
    completed_status: str = DEFAULT_COMPLETED_STATUS  # 比較は小文字化して行う
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    database: DatabaseConfig = field(default_factory=DatabaseConfig)

    def source_label(self, city: str) -> str:
        """Return the exact source label expected for a city key.

        Raises:
            KeyError: if the city is not configured
        """
        return self.cities[city]
