"""Command-line interface over the query gateway.

Provides subcommands: `shipments`, `companies`, `company` and `stats`. Each
command is implemented as a `cmd_*` function that accepts an argparse
namespace and a gateway, and prints a JSON payload to stdout.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel

from shipment_analytics.config import get_settings
from shipment_analytics.errors import DataUnavailable
from shipment_analytics.gateway import QueryGateway, build_gateway
from shipment_analytics.logging_config import configure_logging

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNAVAILABLE = 1
EXIT_NOT_FOUND = 2


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _dump(payload: Any) -> None:
    """Print a model, a list of models or a plain dict as JSON."""
    if isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        data = [p.model_dump(mode="json", by_alias=True) for p in payload]
    else:
        data = payload
    json.dump(data, sys.stdout, indent=2)
    sys.stdout.write("\n")


# --------------------------------------------------
# Commands
# --------------------------------------------------
def cmd_shipments(args: argparse.Namespace, gateway: QueryGateway) -> int:
    """Print one page of the shipment listing."""
    _dump(gateway.shipments(args.limit, args.offset))
    return EXIT_OK


def cmd_companies(_: argparse.Namespace, gateway: QueryGateway) -> int:
    """Print every company rollup, heaviest first."""
    _dump(gateway.companies())
    return EXIT_OK


def cmd_company(args: argparse.Namespace, gateway: QueryGateway) -> int:
    """Print the detail of one company, or a not-found payload."""
    detail = gateway.company(args.name, args.country)
    if detail is None:
        _dump({"error": "Company not found"})
        return EXIT_NOT_FOUND
    _dump(detail)
    return EXIT_OK


def cmd_stats(args: argparse.Namespace, gateway: QueryGateway) -> int:
    """Print company stats, top commodities and monthly volume."""
    _dump(gateway.stats(args.top_n, args.months))
    return EXIT_OK


COMMANDS: dict[str, Callable[[argparse.Namespace, QueryGateway], int]] = {
    "shipments": cmd_shipments,
    "companies": cmd_companies,
    "company": cmd_company,
    "stats": cmd_stats,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Numeric options are taken as strings and coerced by the gateway, so
    malformed values fall back to defaults instead of failing the parse.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="shipment-analytics")
    p.add_argument("--log-file", type=Path, default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ship = sub.add_parser("shipments")
    p_ship.add_argument("--limit", default=None)
    p_ship.add_argument("--offset", default=None)

    sub.add_parser("companies")

    p_company = sub.add_parser("company")
    p_company.add_argument("name")
    p_company.add_argument("--country", default=None)

    p_stats = sub.add_parser("stats")
    p_stats.add_argument("--top-n", default=None)
    p_stats.add_argument("--months", default=None)

    return p


def run(argv: list[str] | None = None, gateway: QueryGateway | None = None) -> int:
    """Parse `argv`, dispatch the command and return the exit status.

    Args:
        argv: Arguments without the program name (defaults to sys.argv).
        gateway: Gateway to query; built from `get_settings()` when omitted.
    """
    args = build_parser().parse_args(argv)

    if gateway is None:
        settings = get_settings()
        configure_logging(args.log_file, settings.log_level)
        gateway = build_gateway(settings)

    try:
        return COMMANDS[args.cmd](args, gateway)
    except DataUnavailable as exc:
        log.error("Shipment data unavailable: %s", exc)
        return EXIT_UNAVAILABLE


def main() -> None:
    """CLI entry point."""
    raise SystemExit(run())


if __name__ == "__main__":
    main()
