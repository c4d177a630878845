"""Response shaping and list-query building shared by the tool handlers."""

import json
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from mcp.types import TextContent
from pydantic import BaseModel, Field

from mcp_server_infakt.currency import convert_all_monetary_fields
from mcp_server_infakt.infakt_client import InfaktClient
from mcp_server_infakt.validation import (
    sanitize_params,
    validate_pagination_params,
    validate_required_string,
)

ToolHandler = Callable[[InfaktClient, Dict[str, Any]], Awaitable[List[TextContent]]]


def json_response(data: Any, convert_money: bool = True) -> List[TextContent]:
    """Serialize an API result, converting grosze to PLN unless told otherwise."""
    if convert_money:
        data = convert_all_monetary_fields(data)
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))]


def text_response(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


class ListQuery(BaseModel):
    """Validated query for a list endpoint.

    ``filters`` holds ransack-style keys (``nip_eq``, ``name_cont`` ...) and is
    sent as ``q[...]`` only when at least one filter is set.
    """

    offset: Optional[float] = None
    limit: Optional[float] = None
    order: Optional[str] = None
    fields: Optional[str] = None
    filters: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any], with_order: bool = False) -> "ListQuery":
        validate_pagination_params(arguments)
        for name in ("order", "fields") if with_order else ("fields",):
            if arguments.get(name) is not None:
                validate_required_string(arguments[name], name)
        return cls(
            offset=arguments.get("offset"),
            limit=arguments.get("limit"),
            order=arguments.get("order") if with_order else None,
            fields=arguments.get("fields"),
        )

    def to_params(self) -> Dict[str, Any]:
        params = sanitize_params(
            {
                "offset": _as_int(self.offset),
                "limit": _as_int(self.limit),
                "order": self.order,
                "fields": self.fields,
            }
        )
        if self.filters:
            params["q"] = dict(self.filters)
        return params


def _as_int(value: Optional[float]) -> Any:
    if value is not None and float(value).is_integer():
        return int(value)
    return value
