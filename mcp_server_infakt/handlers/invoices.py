"""Invoice tool handlers: creation, retrieval, updates and document delivery."""

import base64
from typing import Any, Dict, List

from mcp.types import TextContent

from mcp_server_infakt.handlers.base import ListQuery, json_response, text_response
from mcp_server_infakt.infakt_client import InfaktClient
from mcp_server_infakt.validation import (
    ValidationError,
    sanitize_params,
    validate_array,
    validate_date_string,
    validate_email,
    validate_enum,
    validate_invoice_service,
    validate_required_fields,
    validate_required_string,
    validate_uuid,
)

PAYMENT_METHODS = (
    "cash",
    "transfer",
    "card",
    "barter",
    "check",
    "bill_of_sale",
    "delivery",
    "compensation",
    "accredited",
    "paypal",
    "payu",
    "tpay",
    "przelewy24",
    "dotpay",
    "other",
)

INVOICE_STATUSES = ("draft", "paid", "printed", "sent")

# An invoice only becomes "sent" by being delivered.
CREATE_INVOICE_STATUSES = ("draft", "paid", "printed")

DOCUMENT_TYPES = (
    "original",
    "copy",
    "original_copy",
    "duplicate",
    "original_duplicate",
    "copy_duplicate",
    "regular",
    "double_regular",
)

LOCALES = ("pl", "en", "pe")

INVOICE_DATE_FIELDS = ("invoice_date", "sale_date", "payment_date")


def _validate_optional_dates(arguments: Dict[str, Any]) -> None:
    for field in INVOICE_DATE_FIELDS:
        if arguments.get(field) is not None:
            validate_date_string(arguments[field], field)


async def create_invoice(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Create a VAT invoice asynchronously.

    inFakt queues the invoice and answers with a task reference number;
    infakt_check_invoice_status reports when the invoice itself exists.
    """
    validate_required_string(arguments.get("client_company_name"), "client_company_name")
    validate_required_string(arguments.get("payment_method"), "payment_method")
    validate_enum(arguments["payment_method"], "payment_method", PAYMENT_METHODS)

    validate_required_fields(arguments, ["services"])
    validate_array(arguments["services"], "services", validate_invoice_service)

    status = arguments.get("status")
    if status is not None:
        validate_enum(status, "status", CREATE_INVOICE_STATUSES)
    if status == "paid":
        if not arguments.get("paid_date"):
            raise ValidationError("paid_date", "is required when status is 'paid'")
        validate_date_string(arguments["paid_date"], "paid_date")

    _validate_optional_dates(arguments)
    if arguments.get("client_email") is not None:
        validate_email(arguments["client_email"], "client_email")

    result = await client.create_invoice(sanitize_params(arguments))
    return json_response(result)


async def check_invoice_status(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Report the state of an asynchronous invoice task. No polling happens here."""
    task_reference_number = validate_required_string(
        arguments.get("task_reference_number"), "task_reference_number"
    )
    result = await client.get_invoice_task_status(task_reference_number)
    return json_response(result)


async def list_invoices(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    query = ListQuery.from_arguments(arguments, with_order=True)

    if arguments.get("number"):
        query.filters["number_eq"] = validate_required_string(arguments["number"], "number")
    if arguments.get("client_company_name"):
        query.filters["client_company_name_cont"] = validate_required_string(
            arguments["client_company_name"], "client_company_name"
        )
    if arguments.get("status"):
        query.filters["status_eq"] = validate_enum(arguments["status"], "status", INVOICE_STATUSES)
    if arguments.get("invoice_date_from"):
        query.filters["invoice_date_gteq"] = validate_date_string(
            arguments["invoice_date_from"], "invoice_date_from"
        )
    if arguments.get("invoice_date_to"):
        query.filters["invoice_date_lteq"] = validate_date_string(
            arguments["invoice_date_to"], "invoice_date_to"
        )

    result = await client.list_invoices(query.to_params())
    return json_response(result)


async def get_invoice(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")
    if arguments.get("fields") is not None:
        validate_required_string(arguments["fields"], "fields")

    result = await client.get_invoice(invoice_uuid, sanitize_params({"fields": arguments.get("fields")}))
    return json_response(result)


async def update_invoice(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Update a draft invoice. inFakt rejects updates to issued invoices."""
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")

    if arguments.get("payment_method") is not None:
        validate_enum(arguments["payment_method"], "payment_method", PAYMENT_METHODS)
    _validate_optional_dates(arguments)
    if arguments.get("services") is not None:
        validate_array(arguments["services"], "services", validate_invoice_service)

    invoice_data = sanitize_params({k: v for k, v in arguments.items() if k != "invoice_uuid"})
    result = await client.update_invoice(invoice_uuid, invoice_data)
    return json_response(result)


async def delete_invoice(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")
    await client.delete_invoice(invoice_uuid)
    return text_response(f"Invoice {invoice_uuid} deleted successfully")


async def download_invoice_pdf(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Fetch the invoice PDF and return it base64 encoded in a second text block."""
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")
    if arguments.get("document_type") is not None:
        validate_enum(arguments["document_type"], "document_type", DOCUMENT_TYPES)
    if arguments.get("locale") is not None:
        validate_enum(arguments["locale"], "locale", LOCALES)

    params = sanitize_params(
        {"document_type": arguments.get("document_type"), "locale": arguments.get("locale")}
    )
    pdf_data = await client.download_invoice_pdf(invoice_uuid, params)
    encoded = base64.b64encode(pdf_data).decode("ascii")

    return [
        TextContent(
            type="text",
            text=(
                f"PDF downloaded successfully. Base64 encoded ({len(encoded)} characters). "
                "Use base64 decode to save the file."
            ),
        ),
        TextContent(type="text", text=encoded),
    ]


async def send_invoice_email(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    """Email the invoice. Without recipient_email inFakt uses the client's stored address."""
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")
    if arguments.get("recipient_email") is not None:
        validate_email(arguments["recipient_email"], "recipient_email")

    email_data = sanitize_params({k: v for k, v in arguments.items() if k != "invoice_uuid"})
    result = await client.send_invoice_email(invoice_uuid, email_data)
    return json_response(result)


async def mark_invoice_paid(client: InfaktClient, arguments: Dict[str, Any]) -> List[TextContent]:
    invoice_uuid = validate_uuid(arguments.get("invoice_uuid"), "invoice_uuid")
    paid_date = validate_date_string(arguments.get("paid_date"), "paid_date")

    result = await client.mark_invoice_paid(invoice_uuid, paid_date)
    return json_response(result)
