from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from pydantic import ValidationError

from ferret.domain.context import SearchContext
from ferret.domain.entities import ProviderInfo, Query
from ferret.domain.exceptions import FerretError, SearchError
from ferret.infrastructure.common import (
    parse_goto,
    parse_limit,
    parse_page,
    parse_timeout,
)
from ferret.infrastructure.config import AppConfig, load_config
from ferret.infrastructure.goto import CommandGotoAction
from ferret.infrastructure.logging.setup import configure_logging
from ferret.infrastructure.providers.factory import cleanup_adapters
from ferret.interfaces.app import create_app
from ferret.interfaces.cli.presenter import render_providers, render_results
from ferret.interfaces.composition import (
    build_http_client,
    build_registry,
    build_search_use_case,
)

log = structlog.get_logger(__name__)

__version__ = "0.1.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ferret",
        description="Search engine that unifies search results from different resources.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file (default: $FERRET_CONFIG).",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    search = sub.add_parser("search", help="Search by the given provider.")
    search.add_argument("provider", metavar="PROVIDER")
    search.add_argument("keyword", metavar="KEYWORD", nargs="?", default="")
    search.add_argument("--page", default=None, help="Page number (default 1).")
    search.add_argument("--limit", default=None, help="Results per page (default 10).")
    search.add_argument("--goto", default=None, help="Open the Nth result.")
    search.add_argument(
        "--timeout", default=None, help="Timeout such as 5000ms or 2s."
    )

    sub.add_parser("providers", help="List the registered providers.")

    listen = sub.add_parser("listen", help="Serve the HTTP API.")
    listen.add_argument("--host", default=None, help="Bind host (overrides listen.address).")
    listen.add_argument(
        "--port", default=None, type=int, help="Bind port (overrides listen.address)."
    )

    return parser


def _load(args: argparse.Namespace) -> AppConfig:
    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    elif args.command != "listen":
        # One-shot commands stay quiet unless asked otherwise.
        cli_overrides["log_level"] = "WARNING"
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    return load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )


async def _search(config: AppConfig, query: Query) -> int:
    ctx = SearchContext.background().with_cancel()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, ctx.cancel)
    except NotImplementedError:
        # Windows event loops have no signal handlers.
        pass

    client = build_http_client(config)
    adapters = []
    try:
        registry, adapters = build_registry(config, client)
        goto_action = CommandGotoAction(config.goto_cmd) if query.goto != 0 else None
        uc = build_search_use_case(config, registry, goto_action)
        await uc.execute(query, ctx)
    except SearchError as e:
        print(e, file=sys.stderr)
        return 1
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except NotImplementedError:
            pass
        await cleanup_adapters(adapters)
        await client.aclose()
        ctx.cancel()

    if query.goto == 0:
        print(render_results(query))
    return 0


def _providers(config: AppConfig) -> int:
    # Listing needs no network; the adapters' lazy clients are never opened.
    registry, _ = build_registry(config)
    infos = [
        ProviderInfo(name=p.name, title=p.title, enabled=p.enabled, priority=p.priority)
        for p in registry.list_providers()
    ]
    print(render_providers(infos))
    return 0


def _listen(config: AppConfig, args: argparse.Namespace, log_config: dict) -> int:
    host = args.host or config.listen_host
    port = args.port or config.listen_port
    log.info("listening", host=host, port=port)
    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Config is loaded exactly once here, then handed to the selected command.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(list(argv))
    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = _load(args)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        print(f"failed to load config: {e}", file=sys.stderr)
        return 1

    log_config = configure_logging(config, stderr_only=args.command != "listen")

    try:
        if args.command == "search":
            query = Query(
                provider=args.provider,
                keyword=args.keyword,
                page=parse_page(args.page),
                limit=parse_limit(args.limit),
                goto=parse_goto(args.goto),
                timeout=parse_timeout(args.timeout, config.search_timeout),
            )
            return asyncio.run(_search(config, query))
        if args.command == "providers":
            return _providers(config)
        return _listen(config, args, log_config)
    except FerretError as e:
        print(e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(start())
