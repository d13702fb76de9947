#!/usr/bin/env python3
"""
Site Control MCP Server

Manages website content in Contentful plus a few site files, over MCP
stdio (line-delimited JSON-RPC).

Tools (one per operation, schemas generated from schemas.py):
- create-entity / update-entity / delete-entity: AI tool listings
- create-term, create-category: glossary terms and category pages
- list-entries: read published entries
- update-site-metadata, update-config: site JSON files
- validate-content, backup-content, sync-external-projects

Every tool returns one text item holding the dispatcher's envelope:
{"result": {...}} or {"error": {"code", "kind", "message"}}.

Architecture:
- adapters/: Thin Contentful / GitHub wrappers
- tools/: Operation implementations
- workspace/: Site file I/O
- dispatcher.py: Name → handler routing, validation, envelopes
- server.py: MCP wiring (this file)
"""

import asyncio
import json
import os
import signal

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool
from pydantic import AnyUrl

from adapters.services import build_site_context
from dispatcher import Dispatcher
from logging_config import configure_logging, logger
from resources.site import RESOURCES, read_resource_text, resource_mime_type
from schemas import REQUEST_MODELS
from settings import load_settings

SERVER_NAME = "site-control"


def build_tools(dispatcher: Dispatcher) -> list[Tool]:
    """Tool definitions for every operation the dispatcher can run."""
    tools = []
    for name in dispatcher.operations:
        model = REQUEST_MODELS[name]
        tools.append(Tool(
            name=name,
            description=(model.__doc__ or name).strip(),
            inputSchema=model.input_schema(),
        ))
    return tools


def build_resources() -> list[Resource]:
    return [
        Resource(
            uri=AnyUrl(uri),
            name=name,
            description=description,
            mimeType=mime_type,
        )
        for uri, (name, description, mime_type) in RESOURCES.items()
    ]


def create_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server around an already-wired dispatcher."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return build_tools(dispatcher)

    # Arguments are validated by the dispatcher so errors keep the envelope shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
        envelope = dispatcher.dispatch(name, arguments)
        return [TextContent(type="text", text=json.dumps(envelope, indent=2, ensure_ascii=False, default=str))]

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return build_resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        text = read_resource_text(dispatcher.context, str(uri))
        return [ReadResourceContents(content=text, mime_type=resource_mime_type(str(uri)))]

    return server


async def run_stdio_server(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores. The server
    would survive SIGTERM until stdin closes.
    """
    os._exit(0)


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    dispatcher = Dispatcher(build_site_context(settings))
    server = create_server(dispatcher)

    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    logger.info(f"{SERVER_NAME} running on stdio ({len(dispatcher.operations)} operations)")
    asyncio.run(run_stdio_server(server))


if __name__ == "__main__":
    main()
