"""Client tool handlers."""

from typing import Any, Dict, List

from mcp.types import TextContent

from mcp_server_infakt.handlers.base import ListQuery, json_response, text_response
from mcp_server_infakt.infakt_client import InfaktClient
from mcp_server_infakt.validation import (
    sanitize_params,
    validate_email,
    validate_enum,
    validate_positive_number,
    validate_required_string,
)

BUSINESS_ACTIVITY_KINDS = ("company", "self_employed", "private_person")


async def list_clients(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    query = ListQuery.from_arguments(arguments)

    if arguments.get("company_name"):
        query.filters["company_name_cont"] = validate_required_string(
            arguments["company_name"], "company_name"
        )
    if arguments.get("nip"):
        query.filters["nip_eq"] = validate_required_string(arguments["nip"], "nip")
    if arguments.get("email"):
        query.filters["email_eq"] = validate_required_string(arguments["email"], "email")

    result = await client.list_clients(query.to_params())
    return json_response(result)


async def get_client(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    client_id = validate_positive_number(arguments.get("client_id"), "client_id")
    result = await client.get_client(client_id)
    return json_response(result)


async def create_client(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Create a client. Only company_name is required."""
    validate_required_string(arguments.get("company_name"), "company_name")
    if arguments.get("business_activity_kind") is not None:
        validate_enum(arguments["business_activity_kind"], "business_activity_kind", BUSINESS_ACTIVITY_KINDS)
    if arguments.get("email") is not None:
        validate_email(arguments["email"], "email")

    result = await client.create_client(sanitize_params(arguments))
    return json_response(result)


async def update_client(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    client_id = validate_positive_number(arguments.get("client_id"), "client_id")
    if arguments.get("email") is not None:
        validate_email(arguments["email"], "email")

    client_data = sanitize_params({k: v for k, v in arguments.items() if k != "client_id"})
    result = await client.update_client(client_id, client_data)
    return json_response(result)


async def delete_client(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    client_id = validate_positive_number(arguments.get("client_id"), "client_id")
    await client.delete_client(client_id)
    return text_response(f"Client {arguments['client_id']} deleted successfully")
