"""MCP server for inFakt integration.

TOOL FLOW:
=========

1. The MCP client calls a tool by name with a loosely typed argument dict.
2. handle_tool_call looks the name up in TOOL_HANDLERS.
3. The handler validates its arguments before any network I/O. A bad
   argument raises ValidationError naming the full field path
   (e.g. services[1].tax_symbol).
4. The handler makes exactly one call through InfaktClient.
5. Invoice, client and reference data responses have monetary fields
   converted from grosze to PLN; product and cost responses are returned
   as received.
6. Any failure is translated once into an McpError (invalid params,
   invalid request or internal error) and logged to stderr. The error
   reaches the MCP client as a JSON-RPC error with that code. Nothing is
   retried.

LOGGING:
-------
stdout carries the MCP stdio protocol, so every log line goes to stderr.
"""

import asyncio
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from mcp.server import Server
from mcp.shared.exceptions import McpError
from mcp.types import (
    METHOD_NOT_FOUND,
    CallToolRequest,
    CallToolResult,
    ErrorData,
    ServerResult,
    TextContent,
    Tool,
)

from mcp_server_infakt import handlers
from mcp_server_infakt.config import ConfigurationError, InfaktConfig, load_config
from mcp_server_infakt.handlers.base import ToolHandler
from mcp_server_infakt.infakt_client import InfaktClient, handle_api_error
from mcp_server_infakt.tools import TOOLS

SERVER_NAME = "infakt-mcp-server"
SERVER_VERSION = "1.0.0"

TOOL_HANDLERS: Dict[str, ToolHandler] = {
    # Invoices
    "infakt_create_invoice": handlers.create_invoice,
    "infakt_check_invoice_status": handlers.check_invoice_status,
    "infakt_list_invoices": handlers.list_invoices,
    "infakt_get_invoice": handlers.get_invoice,
    "infakt_update_invoice": handlers.update_invoice,
    "infakt_delete_invoice": handlers.delete_invoice,
    "infakt_download_invoice_pdf": handlers.download_invoice_pdf,
    "infakt_send_invoice_email": handlers.send_invoice_email,
    "infakt_mark_invoice_paid": handlers.mark_invoice_paid,
    # Clients
    "infakt_list_clients": handlers.list_clients,
    "infakt_get_client": handlers.get_client,
    "infakt_create_client": handlers.create_client,
    "infakt_update_client": handlers.update_client,
    "infakt_delete_client": handlers.delete_client,
    # Products
    "infakt_list_products": handlers.list_products,
    "infakt_get_product": handlers.get_product,
    "infakt_create_product": handlers.create_product,
    "infakt_update_product": handlers.update_product,
    "infakt_delete_product": handlers.delete_product,
    # Reference data
    "infakt_get_vat_rates": handlers.get_vat_rates,
    "infakt_get_bank_accounts": handlers.get_bank_accounts,
    "infakt_get_account_info": handlers.get_account_info,
    # Costs
    "infakt_list_costs": handlers.list_costs,
    "infakt_get_cost": handlers.get_cost,
}


def validate_tool_handlers(
    tools: Optional[List[Tool]] = None,
    tool_handlers: Optional[Dict[str, ToolHandler]] = None,
) -> None:
    """Check that declared tools and registered handlers match.

    A tool without a handler is fatal. A handler without a tool only warns.
    """
    tools = TOOLS if tools is None else tools
    tool_handlers = TOOL_HANDLERS if tool_handlers is None else tool_handlers

    tool_names = {tool.name for tool in tools}
    handler_names = set(tool_handlers)

    missing = sorted(tool_names - handler_names)
    if missing:
        raise RuntimeError(f"Missing handlers for tools: {', '.join(missing)}")

    extra = sorted(handler_names - tool_names)
    if extra:
        logger.warning(f"Handlers registered for non-existent tools: {', '.join(extra)}")


async def handle_tool_call(client: InfaktClient, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
    """Dispatch a tool call to its handler."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise McpError(
            ErrorData(
                code=METHOD_NOT_FOUND,
                message=f"Unknown tool: {name}. Available tools: {', '.join(TOOL_HANDLERS)}",
            )
        )

    try:
        return await handler(client, dict(arguments or {}))
    except Exception as e:
        handle_api_error(e)


def create_server(client: InfaktClient) -> Server:
    """Build the MCP server bound to one inFakt client.

    tools/call is registered directly in request_handlers rather than through
    the call_tool decorator. The handlers validate their own arguments, and
    an McpError raised here reaches the session unchanged, so the client gets
    a JSON-RPC error carrying its code (invalid params, invalid request,
    method not found or internal error).
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List available tools."""
        return TOOLS

    async def call_tool(req: CallToolRequest) -> ServerResult:
        """Handle tool calls."""
        name = req.params.name
        logger.info(f"Executing tool: {name}")
        content = await handle_tool_call(client, name, req.params.arguments)
        return ServerResult(CallToolResult(content=content, isError=False))

    server.request_handlers[CallToolRequest] = call_tool
    return server


def configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=os.getenv("INFAKT_LOG_LEVEL", "INFO"))


def log_startup_banner(config: InfaktConfig) -> None:
    logger.info("=" * 60)
    logger.info(f"inFakt MCP Server {SERVER_VERSION}")
    logger.info(f"API Base URL: {config.base_url}")
    logger.info(f"Sandbox Mode: {'YES' if config.use_sandbox else 'NO'}")
    logger.info(f"API Key: {config.masked_api_key()}")
    logger.info(f"Available Tools: {len(TOOLS)}")
    logger.info("=" * 60)


async def main() -> None:
    """Main entry point for the server."""
    from mcp.server.stdio import stdio_server

    load_dotenv(find_dotenv(usecwd=True))
    configure_logging()
    validate_tool_handlers()

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Required environment variables: INFAKT_API_KEY")
        logger.error("Optional environment variables: INFAKT_USE_SANDBOX (true/1), INFAKT_BASE_URL")
        sys.exit(1)

    log_startup_banner(config)

    async with InfaktClient(config) as client:
        server = create_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server started on stdio transport")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("inFakt MCP server crashed with an unhandled exception")
        sys.exit(1)


if __name__ == "__main__":
    run()
