"""Tool descriptors advertised to MCP clients.

Every name here must have a handler in server.TOOL_HANDLERS; the server
refuses to start otherwise.
"""

from typing import Any, Dict, List

from mcp.types import Tool

from mcp_server_infakt.handlers.clients import BUSINESS_ACTIVITY_KINDS
from mcp_server_infakt.handlers.invoices import (
    CREATE_INVOICE_STATUSES,
    DOCUMENT_TYPES,
    INVOICE_STATUSES,
    LOCALES,
    PAYMENT_METHODS,
)

PAGINATION_PROPERTIES: Dict[str, Any] = {
    "offset": {"type": "number", "description": "Pagination offset (default: 0)"},
    "limit": {"type": "number", "description": "Results per page, max 100 (default: 25)"},
    "fields": {"type": "string", "description": "Comma-separated fields to return"},
}

SERVICE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Service/product name (required)"},
        "net_price": {"type": "number", "description": "Net price in grosze (one of net_price, unit_net_price, gross_price is required)"},
        "unit_net_price": {"type": "number", "description": "Unit net price in grosze"},
        "gross_price": {"type": "number", "description": "Gross price in grosze"},
        "tax_symbol": {"type": ["string", "number"], "description": "VAT rate (required): 23, 8, 5, 0, 'zw', 'oo', 'np', etc."},
        "quantity": {"type": "number", "description": "Quantity (default: 1)"},
        "unit": {"type": "string", "description": "Unit of measure (e.g., 'szt', 'kg', 'h')"},
        "pkwiu": {"type": "string", "description": "PKWiU classification code"},
    },
    "required": ["name", "tax_symbol"],
}

CLIENT_PROPERTIES: Dict[str, Any] = {
    "company_name": {"type": "string", "description": "Company name"},
    "first_name": {"type": "string", "description": "Contact person first name"},
    "last_name": {"type": "string", "description": "Contact person last name"},
    "tax_code": {"type": "string", "description": "NIP tax code"},
    "street": {"type": "string", "description": "Street name"},
    "street_number": {"type": "string", "description": "Street number"},
    "flat_number": {"type": "string", "description": "Flat/apartment number"},
    "city": {"type": "string", "description": "City"},
    "post_code": {"type": "string", "description": "Postal code"},
    "country": {"type": "string", "description": "Country code (e.g., 'PL', 'DE', 'US')"},
    "email": {"type": "string", "description": "Email address"},
    "phone": {"type": "string", "description": "Phone number"},
}

PRODUCT_PROPERTIES: Dict[str, Any] = {
    "name": {"type": "string", "description": "Product/service name"},
    "unit_net_price": {"type": "number", "description": "Unit net price"},
    "tax_symbol": {"type": ["string", "number"], "description": "VAT rate: 23, 8, 5, 0, 'zw', etc."},
    "unit": {"type": "string", "description": "Unit of measure (e.g., 'szt', 'kg', 'h')"},
    "pkwiu": {"type": "string", "description": "PKWiU classification code"},
    "description": {"type": "string", "description": "Product description"},
}

INVOICE_UUID = {"type": "string", "description": "UUID of the invoice"}


def _no_arguments() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


TOOLS: List[Tool] = [
    # Invoices
    Tool(
        name="infakt_create_invoice",
        description="Create a new VAT invoice asynchronously. Returns a task reference number; poll infakt_check_invoice_status until the task completes. REQUIRED: client_company_name, payment_method, services (each with name, tax_symbol and one of net_price/unit_net_price/gross_price).",
        inputSchema={
            "type": "object",
            "properties": {
                "client_company_name": {"type": "string", "description": "Client company name (required)"},
                "payment_method": {"type": "string", "description": "Payment method", "enum": list(PAYMENT_METHODS)},
                "status": {"type": "string", "description": "Invoice status (default: draft)", "enum": list(CREATE_INVOICE_STATUSES)},
                "paid_date": {"type": "string", "description": "Payment date in YYYY-MM-DD format (required if status is 'paid')"},
                "services": {"type": "array", "description": "Services/products on the invoice", "items": SERVICE_SCHEMA},
                "client_id": {"type": "number", "description": "ID of existing client (alternative to providing client details)"},
                "client_first_name": {"type": "string", "description": "Client first name (for new clients)"},
                "client_last_name": {"type": "string", "description": "Client last name (for new clients)"},
                "client_tax_code": {"type": "string", "description": "Client NIP tax code (for new clients)"},
                "client_street": {"type": "string", "description": "Client street name (for new clients)"},
                "client_street_number": {"type": "string", "description": "Client street number (for new clients)"},
                "client_flat_number": {"type": "string", "description": "Client flat/apartment number (for new clients)"},
                "client_city": {"type": "string", "description": "Client city (for new clients)"},
                "client_post_code": {"type": "string", "description": "Client postal code (for new clients)"},
                "client_country": {"type": "string", "description": "Client country code, e.g., 'PL' (for new clients)"},
                "client_email": {"type": "string", "description": "Client email address (for new clients)"},
                "client_phone": {"type": "string", "description": "Client phone number (for new clients)"},
                "notes": {"type": "string", "description": "Additional notes to appear on the invoice"},
                "invoice_date": {"type": "string", "description": "Invoice issue date in YYYY-MM-DD format (default: today)"},
                "sale_date": {"type": "string", "description": "Sale/service date in YYYY-MM-DD format (default: today)"},
                "payment_date": {"type": "string", "description": "Payment due date in YYYY-MM-DD format"},
                "bank_account_id": {"type": "number", "description": "Bank account ID for payment (see infakt_get_bank_accounts)"},
            },
            "required": ["client_company_name", "payment_method", "services"],
        },
    ),
    Tool(
        name="infakt_check_invoice_status",
        description="Check the status of an asynchronously created invoice. REQUIRED: task_reference_number from infakt_create_invoice.",
        inputSchema={
            "type": "object",
            "properties": {
                "task_reference_number": {"type": "string", "description": "Task reference number returned by infakt_create_invoice"},
            },
            "required": ["task_reference_number"],
        },
    ),
    Tool(
        name="infakt_list_invoices",
        description="List VAT invoices with optional filtering (number, client name, status, invoice date range), pagination and sorting. Amounts are returned in PLN.",
        inputSchema={
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "order": {"type": "string", "description": "Sort order (e.g., 'invoice_date desc', 'number asc')"},
                "number": {"type": "string", "description": "Filter by invoice number (exact match)"},
                "client_company_name": {"type": "string", "description": "Filter by client name (contains)"},
                "status": {"type": "string", "description": "Filter by status", "enum": list(INVOICE_STATUSES)},
                "invoice_date_from": {"type": "string", "description": "Invoice date from (YYYY-MM-DD, inclusive)"},
                "invoice_date_to": {"type": "string", "description": "Invoice date to (YYYY-MM-DD, inclusive)"},
            },
        },
    ),
    Tool(
        name="infakt_get_invoice",
        description="Get detailed information about a specific invoice. REQUIRED: invoice_uuid.",
        inputSchema={
            "type": "object",
            "properties": {
                "invoice_uuid": INVOICE_UUID,
                "fields": {"type": "string", "description": "Comma-separated fields to return (optional)"},
            },
            "required": ["invoice_uuid"],
        },
    ),
    Tool(
        name="infakt_update_invoice",
        description="Update a draft invoice. REQUIRED: invoice_uuid. Only draft invoices can be updated; services replace all existing services.",
        inputSchema={
            "type": "object",
            "properties": {
                "invoice_uuid": INVOICE_UUID,
                "client_company_name": {"type": "string", "description": "Client company name"},
                "payment_method": {"type": "string", "description": "Payment method", "enum": list(PAYMENT_METHODS)},
                "services": {"type": "array", "description": "Services (replaces all existing services)", "items": SERVICE_SCHEMA},
                "notes": {"type": "string", "description": "Invoice notes"},
                "invoice_date": {"type": "string", "description": "Invoice date (YYYY-MM-DD)"},
                "sale_date": {"type": "string", "description": "Sale date (YYYY-MM-DD)"},
                "payment_date": {"type": "string", "description": "Payment due date (YYYY-MM-DD)"},
            },
            "required": ["invoice_uuid"],
        },
    ),
    Tool(
        name="infakt_delete_invoice",
        description="Delete a draft invoice. REQUIRED: invoice_uuid. This operation is permanent and cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {"invoice_uuid": INVOICE_UUID},
            "required": ["invoice_uuid"],
        },
    ),
    Tool(
        name="infakt_download_invoice_pdf",
        description="Download an invoice as PDF. Returns the document base64 encoded. REQUIRED: invoice_uuid.",
        inputSchema={
            "type": "object",
            "properties": {
                "invoice_uuid": INVOICE_UUID,
                "document_type": {"type": "string", "description": "Type of document to generate", "enum": list(DOCUMENT_TYPES)},
                "locale": {"type": "string", "description": "Language: pl (Polish), en (English), pe (Polish-English)", "enum": list(LOCALES)},
            },
            "required": ["invoice_uuid"],
        },
    ),
    Tool(
        name="infakt_send_invoice_email",
        description="Send an invoice by email. REQUIRED: invoice_uuid. Uses the client's email address unless recipient_email is given.",
        inputSchema={
            "type": "object",
            "properties": {
                "invoice_uuid": INVOICE_UUID,
                "recipient_email": {"type": "string", "description": "Recipient email address (optional)"},
                "email_subject": {"type": "string", "description": "Custom email subject (optional)"},
                "email_message": {"type": "string", "description": "Custom email message body (optional)"},
            },
            "required": ["invoice_uuid"],
        },
    ),
    Tool(
        name="infakt_mark_invoice_paid",
        description="Mark an invoice as paid. REQUIRED: invoice_uuid, paid_date.",
        inputSchema={
            "type": "object",
            "properties": {
                "invoice_uuid": INVOICE_UUID,
                "paid_date": {"type": "string", "description": "Payment date in YYYY-MM-DD format"},
            },
            "required": ["invoice_uuid", "paid_date"],
        },
    ),
    # Clients
    Tool(
        name="infakt_list_clients",
        description="List clients with optional filtering by company name (contains), NIP and email (exact match).",
        inputSchema={
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "company_name": {"type": "string", "description": "Filter by company name (contains)"},
                "nip": {"type": "string", "description": "Filter by NIP tax code (exact match)"},
                "email": {"type": "string", "description": "Filter by email (exact match)"},
            },
        },
    ),
    Tool(
        name="infakt_get_client",
        description="Get detailed information about a specific client. REQUIRED: client_id.",
        inputSchema={
            "type": "object",
            "properties": {"client_id": {"type": "number", "description": "Client ID"}},
            "required": ["client_id"],
        },
    ),
    Tool(
        name="infakt_create_client",
        description="Create a new client. REQUIRED: company_name.",
        inputSchema={
            "type": "object",
            "properties": {
                **CLIENT_PROPERTIES,
                "business_activity_kind": {"type": "string", "description": "Type of business activity", "enum": list(BUSINESS_ACTIVITY_KINDS)},
            },
            "required": ["company_name"],
        },
    ),
    Tool(
        name="infakt_update_client",
        description="Update an existing client. REQUIRED: client_id. Only provided fields are changed.",
        inputSchema={
            "type": "object",
            "properties": {
                "client_id": {"type": "number", "description": "Client ID"},
                **CLIENT_PROPERTIES,
            },
            "required": ["client_id"],
        },
    ),
    Tool(
        name="infakt_delete_client",
        description="Delete a client. REQUIRED: client_id. Clients with invoices cannot be deleted; deletion cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {"client_id": {"type": "number", "description": "Client ID to delete"}},
            "required": ["client_id"],
        },
    ),
    # Products
    Tool(
        name="infakt_list_products",
        description="List products/services with optional filtering by name (contains).",
        inputSchema={
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "name": {"type": "string", "description": "Filter by product name (contains)"},
            },
        },
    ),
    Tool(
        name="infakt_get_product",
        description="Get detailed information about a specific product. REQUIRED: product_id.",
        inputSchema={
            "type": "object",
            "properties": {"product_id": {"type": "number", "description": "Product ID"}},
            "required": ["product_id"],
        },
    ),
    Tool(
        name="infakt_create_product",
        description="Create a product/service that can be reused on invoices. REQUIRED: name, unit_net_price, tax_symbol.",
        inputSchema={
            "type": "object",
            "properties": PRODUCT_PROPERTIES,
            "required": ["name", "unit_net_price", "tax_symbol"],
        },
    ),
    Tool(
        name="infakt_update_product",
        description="Update an existing product. REQUIRED: product_id. Only provided fields are changed.",
        inputSchema={
            "type": "object",
            "properties": {
                "product_id": {"type": "number", "description": "Product ID"},
                **PRODUCT_PROPERTIES,
            },
            "required": ["product_id"],
        },
    ),
    Tool(
        name="infakt_delete_product",
        description="Delete a product. REQUIRED: product_id. Products used on invoices cannot be deleted; deletion cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {"product_id": {"type": "number", "description": "Product ID to delete"}},
            "required": ["product_id"],
        },
    ),
    # Reference data
    Tool(
        name="infakt_get_vat_rates",
        description="List VAT rates available on invoices (23%, 8%, 5%, 0% and special rates such as exempt).",
        inputSchema=_no_arguments(),
    ),
    Tool(
        name="infakt_get_bank_accounts",
        description="List bank accounts configured for invoices.",
        inputSchema=_no_arguments(),
    ),
    Tool(
        name="infakt_get_account_info",
        description="Get account information including subscription plan and usage limits.",
        inputSchema=_no_arguments(),
    ),
    # Costs
    Tool(
        name="infakt_list_costs",
        description="List cost documents (expenses) with optional pagination.",
        inputSchema={"type": "object", "properties": dict(PAGINATION_PROPERTIES)},
    ),
    Tool(
        name="infakt_get_cost",
        description="Get detailed information about a specific cost document. REQUIRED: cost_uuid.",
        inputSchema={
            "type": "object",
            "properties": {"cost_uuid": {"type": "string", "description": "Cost document UUID"}},
            "required": ["cost_uuid"],
        },
    ),
]
