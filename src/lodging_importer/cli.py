"""Command line entry point for a one-shot import run."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from lodging_importer.config.settings import (
    DEFAULT_ENV_FILE,
    Settings,
    load_settings,
    parse_header_declaration,
)
from lodging_importer.core.logging import configure_logging
from lodging_importer.errors import ConfigurationError, TransportError
from lodging_importer.services.listing_client import ListingClient
from lodging_importer.storage.json_writer import JsonStreamWriter
from lodging_importer.tasks.paginate import ImportStats, PaginationDriver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lodging-importer",
        description="Fetch every listing page and print catalog accommodations as JSON documents.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=DEFAULT_ENV_FILE,
        help="Dotenv file to read configuration from (default: .env)",
    )
    parser.add_argument("--url", help="Override HTTP_URL")
    parser.add_argument(
        "--header",
        action="append",
        metavar="'NAME: VALUE'",
        help="Extra request header (repeatable); wins over HTTP_HEADER_* declarations",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    parser.add_argument(
        "--override",
        action="append",
        metavar="KEY=VALUE",
        help="Override a Settings attribute (repeatable). Values accept JSON literals.",
    )
    return parser


def _decode_override(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _collect_overrides(parser: argparse.ArgumentParser, args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    for entry in args.override or ():
        if "=" not in entry:
            parser.error(f"Override must be in KEY=VALUE form (got '{entry}')")
        key, value = entry.split("=", 1)
        key = key.strip()
        if key not in Settings.model_fields:
            parser.error(f"Unknown setting '{key}'")
        overrides[key] = _decode_override(value.strip())
    if args.url:
        overrides["http_url"] = args.url
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.header:
        headers = dict(overrides.get("custom_headers") or {})
        for declaration in args.header:
            name, value = parse_header_declaration(declaration, source="--header")
            headers[name] = value
        overrides["custom_headers"] = headers
    return overrides


def run(settings: Settings, *, stream: Optional[TextIO] = None) -> ImportStats:
    writer = JsonStreamWriter(stream, indent=settings.output_indent)
    with ListingClient(
        settings.http_url,
        headers=settings.request_headers(),
        method=settings.http_method,
        timeout=settings.http_timeout_s,
    ) as client:
        return PaginationDriver(client, writer).run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        overrides = _collect_overrides(parser, args)
        settings = load_settings(args.env_file, **overrides)
    except ConfigurationError as exc:
        configure_logging(args.log_level or "INFO")
        logger.error("Configuration error: %s", exc)
        return 1

    configure_logging(settings.log_level, settings.log_dir)
    logger.info("Importing listings from %s", settings.http_url)

    try:
        run(settings)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1
    except TransportError as exc:
        logger.error("Import aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
