"""Command line interface for the kernel selector.

Usage:
    kernel-selector list [--base-url URL] [--json]
    python -m kernel_selector list --base-url http://localhost:8888/

Examples:
    # Print the change-kernel menu of a local notebook server
    kernel-selector list

    # Same, as JSON
    KERNEL_SELECTOR_BASE_URL=http://nb.example:8888/ kernel-selector list --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List, Optional

import httpx
from pydantic import ValidationError

from kernel_selector.catalog import SpecRegistry
from kernel_selector.logging import configure_logging, create_logger
from kernel_selector.protocols import LoggerProtocol
from kernel_selector.settings import Settings, get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kernel-selector",
        description="Inspect the kernel specifications offered by a notebook server.",
    )
    parser.add_argument("--log-level", default=None, help="Override KERNEL_SELECTOR_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List kernels in menu order")
    list_parser.add_argument("--base-url", default=None, help="Notebook server base URL")
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    return parser


async def list_kernels(
    settings: Settings,
    as_json: bool = False,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[LoggerProtocol] = None,
) -> int:
    """Fetch the catalog and print the menu. Returns the process exit code."""
    registry = SpecRegistry(
        settings.base_url,
        client=client,
        timeout=settings.request_timeout,
        logger=logger or create_logger("cli"),
    )
    await registry.refresh()

    if registry.last_error is not None:
        print(f"✗ Could not fetch {registry.catalog_url}: {registry.last_error}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps([
            {
                "name": entry.name,
                "display_name": entry.display_name,
                "resources": dict(registry.kernelspecs[entry.name].resources),
            }
            for entry in registry.menu_entries
        ], indent=2))
    else:
        for entry in registry.menu_entries:
            print(f"{entry.name}\t{entry.display_name}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "base_url", None):
        overrides["base_url"] = args.base_url
    if overrides:
        try:
            settings = Settings(**{**settings.model_dump(), **overrides})
        except ValidationError as e:
            for error in e.errors():
                print(f"✗ Invalid {error['loc'][0]}: {error['msg']}", file=sys.stderr)
            return 2

    configure_logging(settings.log_level, json_output=settings.log_json)

    if args.command == "list":
        return asyncio.run(list_kernels(settings, as_json=args.json))
    return 2


if __name__ == "__main__":
    sys.exit(main())
