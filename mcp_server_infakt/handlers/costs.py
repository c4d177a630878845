"""Cost document tool handlers (read-only)."""

from typing import Any, Dict, List

from mcp.types import TextContent

from mcp_server_infakt.handlers.base import ListQuery, json_response
from mcp_server_infakt.infakt_client import InfaktClient
from mcp_server_infakt.validation import validate_uuid


async def list_costs(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    query = ListQuery.from_arguments(arguments)
    result = await client.list_costs(query.to_params())
    return json_response(result, convert_money=False)


async def get_cost(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    cost_uuid = validate_uuid(arguments.get("cost_uuid"), "cost_uuid")
    result = await client.get_cost(cost_uuid)
    return json_response(result, convert_money=False)
