from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx
import structlog

from debridscan.domain.entities.links import DetectedLink
from debridscan.infrastructure.background.httpx_client import HttpxBackgroundClient
from debridscan.infrastructure.composition import create_link_scanner
from debridscan.infrastructure.config import AppConfig, load_config
from debridscan.infrastructure.document.html_document import HtmlDocument
from debridscan.infrastructure.logging.setup import configure_logging
from debridscan.infrastructure.preferences.memory import InMemoryPreferenceStore

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="debridscan")
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Scan an HTML file for hoster and magnet links.")
    scan.add_argument("path", help="HTML file to scan.")
    scan.add_argument(
        "--base-url",
        default="",
        help="URL the page was loaded from (resolves relative links).",
    )
    scan.add_argument(
        "--no-unrestrict",
        action="store_true",
        help="Only detect links, do not submit them for unrestricting.",
    )

    # Config wiring flags (no business logic)
    scan.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    scan.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    scan.add_argument(
        "--background-url",
        default=None,
        help="Override background service URL.",
    )
    scan.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    scan.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


async def scan_file(
    config: AppConfig,
    html: str,
    *,
    base_url: str = "",
    unrestrict: bool = True,
) -> list[DetectedLink]:
    """Run one scan cycle over *html* against the configured background service."""
    document = HtmlDocument(html, base_url=base_url)
    preferences = InMemoryPreferenceStore({"autoUnrestrict": unrestrict})
    async with httpx.AsyncClient(timeout=config.background.timeout_seconds) as http:
        client = HttpxBackgroundClient(
            base_url=config.background.base_url, http_client=http
        )
        scanner = create_link_scanner(
            document=document,
            client=client,
            preferences=preferences,
            config=config.scan,
        )
        try:
            return await scanner.scheduler.perform_auto_scan()
        finally:
            await scanner.close()


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    cli_overrides: dict[str, Any] = {}
    if args.background_url:
        cli_overrides["background_url"] = args.background_url
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    try:
        html = Path(args.path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.error("input_unreadable", path=args.path, error=str(e))
        return 1

    links = asyncio.run(
        scan_file(
            config,
            html,
            base_url=args.base_url,
            unrestrict=not args.no_unrestrict,
        )
    )
    json.dump([link.to_dict() for link in links], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
