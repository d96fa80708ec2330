"""Stdio MCP adapter: exposes the tool catalog over the Model Context Protocol.

Run with the ``portfolio-mcp`` console script. Logs go to stderr; stdout carries
protocol frames only.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.shared.exceptions import McpError

from portfolio_mcp import config
from portfolio_mcp.adapters.dataset_store import DatasetStore, default_store
from portfolio_mcp.services import tool_service

log = logging.getLogger(__name__)


async def handle_list_tools() -> list[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
        for tool in tool_service.list_tools()
    ]


def _method_not_found(exc: tool_service.UnknownToolError) -> McpError:
    return McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=str(exc)))


async def handle_call_tool(
    store: DatasetStore, name: str, arguments: Optional[dict[str, Any]]
) -> list[types.TextContent]:
    """Run one tool. Unknown tools become a protocol error; bad arguments an error result."""
    try:
        envelope = tool_service.call_tool(store, name, arguments or {})
    except tool_service.UnknownToolError as exc:
        raise _method_not_found(exc) from exc
    return [types.TextContent(type="text", text=item.text) for item in envelope.content]


def build_server(store: DatasetStore) -> Server:
    server: Server = Server(config.SERVER_NAME, version=config.SERVER_VERSION)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return await handle_list_tools()

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await handle_call_tool(store, name, arguments)

    # The decorated handler turns every exception into an isError result, so
    # unknown names are rejected before it runs.
    tool_result_handler = server.request_handlers[types.CallToolRequest]

    async def _dispatch_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        if req.params.name not in tool_service.TOOLS_BY_NAME:
            log.warning("tool_unknown name=%s", req.params.name)
            raise _method_not_found(tool_service.UnknownToolError(req.params.name))
        return await tool_result_handler(req)

    server.request_handlers[types.CallToolRequest] = _dispatch_call_tool
    return server


async def serve(store: Optional[DatasetStore] = None) -> None:
    store = store if store is not None else default_store()
    server = build_server(store)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        log.info("mcp_server_started name=%s transport=stdio", config.SERVER_NAME)
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=config.SERVER_NAME,
                server_version=config.SERVER_VERSION,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main() -> None:
    config.configure_logging()
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        log.info("mcp_server_stopped reason=interrupt")


if __name__ == "__main__":
    main()
