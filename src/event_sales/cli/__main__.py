from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..db.order_store import StoreError, db_connection, ensure_schema
from ..errors import CityValidationError, SchemaError, UnknownCityError, UploadTooLargeError
from ..logging.init import log_summary, setup_logging
from ..logging.skip_log import SkipLogBuffer
from ..models.config_models import AppConfig
from ..models.parse_result import ParseResult
from ..services.frame import orders_to_frame
from ..services.reconciler import reconcile
from ..services.summary import render_summary_line
from ..services.uploads import check_size, load_latest, upload_export

"""CLI entrypoint.

Commands:
- parse FILE   parse an export locally (no database)
- upload FILE  validate an export for a city and store it
- show         reparse the latest stored export for a city

Every successful run ends with one SUMMARY line.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_VALIDATION = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so DB variables in it take precedence over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="event-sales", description="Event sales export reconciler")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    parse_p = sub.add_parser("parse", help="Parse an export file")
    parse_p.add_argument("file", type=Path)
    parse_p.add_argument("--city", default=None, help="City key (default: all known cities)")
    parse_p.add_argument("--out", type=Path, default=None, help="Write records as CSV")
    parse_p.add_argument("--skip-log", action="store_true", help="Write skipped rows to logs/")
    parse_p.add_argument("--inspect-data", action="store_true", help="Print the first records")

    upload_p = sub.add_parser("upload", help="Validate and store an export for a city")
    upload_p.add_argument("file", type=Path)
    upload_p.add_argument("--city", required=True)

    show_p = sub.add_parser("show", help="Reparse the latest stored export for a city")
    show_p.add_argument("--city", required=True)
    return p.parse_args(argv)


def _resolve_config(path: Path | None, logger) -> AppConfig:
    # 明示指定時のみ欠落を致命扱い
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug(f"no {DEFAULT_CONFIG_PATH}; using built-in defaults")
            return AppConfig()
        path = DEFAULT_CONFIG_PATH
    return load_config(path)


def _read_export(path: Path) -> str:
    # utf-8-sig drops a leading BOM; other encodings raise UnicodeDecodeError
    return path.read_text(encoding="utf-8-sig")


def _log_summary(result: ParseResult) -> None:
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])


def _inspect(result: ParseResult, limit: int = 5) -> None:
    frame = orders_to_frame(result.records[:limit])
    print(frame[["order_id", "customer_name", "class_name", "quantity", "allocated_revenue"]].to_string(index=False))


def _cmd_parse(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    if not args.file.exists():
        logger.error(f"file not found: {args.file}")
        return EXIT_FATAL
    text = _read_export(args.file)
    try:
        check_size(text, cfg)
    except UploadTooLargeError as e:
        logger.error(f"upload: {e}")
        return EXIT_VALIDATION
    result = reconcile(text, args.city, cities=cfg.cities, completed_status=cfg.completed_status)
    logger.info(f"Parsed {args.file.name}: {len(result.records)} records")

    if args.skip_log:
        buffer = SkipLogBuffer()
        buffer.extend(args.file.name, result.skipped)
        written = buffer.flush()
        if written is not None:
            logger.info(f"skipped rows written to {written}")
    if args.out is not None:
        orders_to_frame(result.records).to_csv(args.out, index=False)
        logger.info(f"records written to {args.out}")
    if args.inspect_data:
        _inspect(result)

    _log_summary(result)
    return EXIT_SUCCESS


def _cmd_upload(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    if not args.file.exists():
        logger.error(f"file not found: {args.file}")
        return EXIT_FATAL
    text = _read_export(args.file)
    try:
        with db_connection(cfg.database) as cur:
            ensure_schema(cur)
            outcome = upload_export(cur, text, args.city, cfg, file_name=args.file.name)
    except (CityValidationError, UploadTooLargeError) as e:
        logger.error(f"upload: {e}")
        return EXIT_VALIDATION
    _log_summary(outcome.result)
    return EXIT_SUCCESS


def _cmd_show(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    with db_connection(cfg.database) as cur:
        ensure_schema(cur)
        loaded = load_latest(cur, args.city, cfg)
    if loaded is None:
        _log_summary(ParseResult(records=[], city=args.city))
        return EXIT_SUCCESS
    logger.info(f"latest upload: {loaded.file_name} at {loaded.created_at}")
    _inspect(loaded.result)
    _log_summary(loaded.result)
    return EXIT_SUCCESS


_COMMANDS = {
    "parse": _cmd_parse,
    "upload": _cmd_upload,
    "show": _cmd_show,
}


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([...]) を直接呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        return _COMMANDS[args.command](args, cfg, logger)
    except SchemaError as e:
        logger.error(f"schema: {e}")
        return EXIT_FATAL
    except UnknownCityError as e:
        logger.error(f"city: {e}")
        return EXIT_FATAL
    except StoreError as e:
        logger.error(f"database: {e}")
        return EXIT_FATAL
    except (UnicodeDecodeError, OSError) as e:
        logger.error(f"file: {e}")
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
