"""Tool handlers, one module per inFakt resource."""

from mcp_server_infakt.handlers.clients import (
    create_client,
    delete_client,
    get_client,
    list_clients,
    update_client,
)
from mcp_server_infakt.handlers.costs import get_cost, list_costs
from mcp_server_infakt.handlers.invoices import (
    check_invoice_status,
    create_invoice,
    delete_invoice,
    download_invoice_pdf,
    get_invoice,
    list_invoices,
    mark_invoice_paid,
    send_invoice_email,
    update_invoice,
)
from mcp_server_infakt.handlers.products import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)
from mcp_server_infakt.handlers.reference import (
    get_account_info,
    get_bank_accounts,
    get_vat_rates,
)

__all__ = [
    "check_invoice_status",
    "create_client",
    "create_invoice",
    "create_product",
    "delete_client",
    "delete_invoice",
    "delete_product",
    "download_invoice_pdf",
    "get_account_info",
    "get_bank_accounts",
    "get_client",
    "get_cost",
    "get_invoice",
    "get_product",
    "get_vat_rates",
    "list_clients",
    "list_costs",
    "list_invoices",
    "list_products",
    "mark_invoice_paid",
    "send_invoice_email",
    "update_client",
    "update_invoice",
    "update_product",
]
