"""Product tool handlers.

Product responses are returned as received; see DESIGN.md on monetary units.
"""

from typing import Any, Dict, List

from mcp.types import TextContent

from mcp_server_infakt.handlers.base import ListQuery, json_response, text_response
from mcp_server_infakt.infakt_client import InfaktClient
from mcp_server_infakt.validation import (
    sanitize_params,
    validate_positive_number,
    validate_required_string,
    validate_tax_symbol,
)


async def list_products(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    query = ListQuery.from_arguments(arguments)
    if arguments.get("name"):
        query.filters["name_cont"] = validate_required_string(arguments["name"], "name")

    result = await client.list_products(query.to_params())
    return json_response(result, convert_money=False)


async def get_product(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    product_id = validate_positive_number(arguments.get("product_id"), "product_id")
    result = await client.get_product(product_id)
    return json_response(result, convert_money=False)


async def create_product(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    validate_required_string(arguments.get("name"), "name")
    validate_positive_number(arguments.get("unit_net_price"), "unit_net_price")
    validate_tax_symbol(arguments.get("tax_symbol"))

    result = await client.create_product(sanitize_params(arguments))
    return json_response(result, convert_money=False)


async def update_product(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    product_id = validate_positive_number(arguments.get("product_id"), "product_id")
    if arguments.get("unit_net_price") is not None:
        validate_positive_number(arguments["unit_net_price"], "unit_net_price")
    if arguments.get("tax_symbol") is not None:
        validate_tax_symbol(arguments["tax_symbol"])

    product_data = sanitize_params({k: v for k, v in arguments.items() if k != "product_id"})
    result = await client.update_product(product_id, product_data)
    return json_response(result, convert_money=False)


async def delete_product(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    product_id = validate_positive_number(arguments.get("product_id"), "product_id")
    await client.delete_product(product_id)
    return text_response(f"Product {arguments['product_id']} deleted successfully")
