#!/usr/bin/env python3
"""
CLI interface for site-control.

Usage:
    site-control operations
    site-control call create-term --params '{"term": "RAG", ...}'
    echo '{"contentType": "all"}' | site-control call validate-content --params -
    site-control serve

Runs the same dispatcher as the MCP server, for scripts and agents
that don't speak MCP. Exit status is 1 when the envelope holds an error.
"""

import argparse
import json
import sys
from typing import Any

from adapters.services import build_site_context
from dispatcher import Dispatcher
from logging_config import configure_logging
from schemas import REQUEST_MODELS
from settings import load_settings


def _read_params(args: argparse.Namespace) -> Any:
    raw = args.params
    if raw == "-":
        raw = sys.stdin.read()
    if not raw or not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise SystemExit(f"--params is not valid JSON: {e}")


def cmd_operations(args: argparse.Namespace) -> int:
    """List operations with their one-line descriptions."""
    for name, model in sorted(REQUEST_MODELS.items()):
        print(f"{name:<24} {(model.__doc__ or '').strip()}")
    return 0


def cmd_call(args: argparse.Namespace) -> int:
    """Run one operation and print its envelope."""
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)
    dispatcher = Dispatcher(build_site_context(settings))
    envelope = dispatcher.dispatch(args.operation, _read_params(args))
    print(json.dumps(envelope, indent=2, ensure_ascii=False, default=str))
    return 1 if "error" in envelope else 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the MCP stdio server."""
    from server import main as serve

    serve()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Manage site content in Contentful",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    site-control operations
    site-control call create-category --params '{"name": "Vision", "slug": "vision",
        "description": "Vision tools", "icon": "eye",
        "filterField": "category", "filterValues": ["vision"]}'
    site-control call list-entries --params '{"contentType": "tools", "search": "speech"}'
    echo '{"includeAssets": true}' | site-control call backup-content --params -
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # operations
    ops_p = subparsers.add_parser("operations", help="List available operations")
    ops_p.set_defaults(func=cmd_operations)

    # call
    call_p = subparsers.add_parser("call", help="Run one operation")
    call_p.add_argument("operation", help="Operation name (see 'operations')")
    call_p.add_argument(
        "--params",
        help="JSON object of arguments, or - to read it from stdin",
    )
    call_p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override SITE_CONTROL_LOG_LEVEL",
    )
    call_p.set_defaults(func=cmd_call)

    # serve
    serve_p = subparsers.add_parser("serve", help="Run the MCP stdio server")
    serve_p.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
