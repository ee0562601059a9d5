"""Command-line entry point running the OpenCitations MCP server on stdio."""

from __future__ import annotations

import argparse
import logging
import sys

from opencitations_mcp.core.settings import load_settings, resolve_access_token
from opencitations_mcp.exceptions import ConfigError
from opencitations_mcp.providers.clients.opencitations import OpenCitationsClient
from opencitations_mcp.server import build_server

logger = logging.getLogger("opencitations_mcp")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OpenCitations MCP server (stdio transport)")
    parser.add_argument(
        "--token",
        help="OpenCitations access token (overrides OPENCITATIONS_ACCESS_TOKEN)",
        default=None,
    )
    parser.add_argument(
        "--base-url",
        help="OpenCitations Index API root (defaults to OPENCITATIONS_BASE_URL or the public v2 API)",
        default=None,
    )
    parser.add_argument(
        "--timeout",
        help="Timeout in seconds for each API request",
        type=float,
        default=None,
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for messages written to stderr",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    return parser


def _configure_logging(level: str) -> None:
    # stdout carries the protocol stream; diagnostics go to stderr only.
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        settings = load_settings(base_url=args.base_url, timeout=args.timeout)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    access_token = resolve_access_token(args.token, settings.access_token)
    if not access_token:
        logger.warning("No access token set (optional but recommended)")
        logger.warning("  Use: --token=YOUR_TOKEN")
        logger.warning("  Or set OPENCITATIONS_ACCESS_TOKEN environment variable")

    client = OpenCitationsClient(settings=settings)
    server = build_server(client, access_token)

    logger.info("OpenCitations MCP Server running on stdio")
    try:
        server.run("stdio")
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Fatal error")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
