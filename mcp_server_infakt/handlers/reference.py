"""Reference data tool handlers: VAT rates, bank accounts, account info."""

from typing import Any, Dict, List

from mcp.types import TextContent

from mcp_server_infakt.handlers.base import json_response
from mcp_server_infakt.infakt_client import InfaktClient


async def get_vat_rates(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    return json_response(await client.list_vat_rates())


async def get_bank_accounts(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    return json_response(await client.list_bank_accounts())


async def get_account_info(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Plan details and usage limits of the account behind the API key."""
    return json_response(await client.get_account_info())
