"""inFakt REST API client for API communication."""

import json
from typing import Any, Dict, NoReturn, Optional
from urllib.parse import quote

import httpx
from loguru import logger
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, ErrorData

from mcp_server_infakt.config import InfaktConfig

STATUS_MESSAGES = {
    400: "Bad request: Invalid parameters",
    401: "Unauthorized: Invalid or missing API key",
    403: "Forbidden: Insufficient permissions",
    404: "Not found: Resource does not exist",
    422: "Unprocessable entity: Validation failed",
    429: "Too many requests: Rate limit exceeded",
    500: "Internal server error",
    503: "Service unavailable: API is temporarily down",
}


class InfaktApiError(Exception):
    """Failure detected by the adapter itself while talking to inFakt."""

    def __init__(self, status_code: int, response_data: Any, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


def extract_error_message(status_code: Optional[int], data: Any) -> str:
    """Pick the most specific message from an error body, else a status-based one."""
    if isinstance(data, dict):
        if isinstance(data.get("message"), str):
            return data["message"]
        if isinstance(data.get("error"), str):
            return data["error"]
        errors = data.get("errors")
        if isinstance(errors, str):
            return errors
        if isinstance(errors, list) and errors:
            return ", ".join(str(error) for error in errors)

    if status_code is None:
        return "Network error occurred"
    return STATUS_MESSAGES.get(status_code, f"API error: {status_code}")


def _error_code_for_status(status_code: Optional[int]) -> int:
    if status_code in (400, 422):
        return INVALID_PARAMS
    if status_code in (401, 403, 404):
        return INVALID_REQUEST
    return INTERNAL_ERROR


def _response_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def handle_api_error(error: Exception) -> NoReturn:
    """Translate any failure into an McpError and raise it.

    McpErrors (validation errors included) pass through unchanged. Everything
    else is logged to stderr before being raised.
    """
    if isinstance(error, McpError):
        raise error

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        data = _response_body(error.response)
        message = extract_error_message(status, data)
        logger.error(
            f"inFakt API error: status={status} message={message} "
            f"method={error.request.method} url={error.request.url}"
        )
        details = f"\nDetails: {json.dumps(data, ensure_ascii=False)}" if data else ""
        raise McpError(
            ErrorData(
                code=_error_code_for_status(status),
                message=f"inFakt API error ({status}): {message}{details}",
            )
        ) from error

    if isinstance(error, httpx.RequestError):
        message = str(error) or extract_error_message(None, None)
        try:
            url = error.request.url
        except RuntimeError:
            url = "unknown"
        logger.error(f"inFakt API error: status=unknown message={message} url={url}")
        raise McpError(
            ErrorData(code=INTERNAL_ERROR, message=f"inFakt API error (unknown): {message}")
        ) from error

    if isinstance(error, InfaktApiError):
        logger.error(f"inFakt API error: status={error.status_code} message={error}")
        raise McpError(
            ErrorData(
                code=INTERNAL_ERROR,
                message=f"inFakt API error ({error.status_code}): {error}",
            )
        ) from error

    logger.error(f"Unexpected error: {error}")
    raise McpError(ErrorData(code=INTERNAL_ERROR, message=f"Unexpected error: {error}")) from error


def encode_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Flatten nested filter objects into bracketed keys, e.g. q[nip_eq]."""
    if not params:
        return None
    encoded: Dict[str, Any] = {}
    for key, value in params.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                encoded[f"{key}[{sub_key}]"] = sub_value
        else:
            encoded[key] = value
    return encoded


def _path_id(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return quote(str(value), safe="")


class InfaktClient:
    """Client for interacting with inFakt via REST API."""

    def __init__(self, config: InfaktConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Initialize inFakt client with configuration."""
        self.config = config
        self.api_url = config.base_url.rstrip("/")
        self.timeout = config.timeout

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={
                "X-inFakt-ApiKey": config.api_key,
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": "infakt-mcp-server/1.0.0",
            },
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> httpx.Response:
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        url = f"{self.api_url}{path}"

        try:
            response = await self.client.request(
                method=method,
                url=url,
                params=encode_params(params),
                json=json_data,
            )
            if not 200 <= response.status_code < 300:
                raise httpx.HTTPStatusError(
                    f"HTTP {response.status_code}", request=response.request, response=response
                )
            return response
        except Exception as e:
            handle_api_error(e)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Make a request to the inFakt API and decode the JSON body."""
        response = await self._send(method, endpoint, params=params, json_data=json_data)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            handle_api_error(
                InfaktApiError(response.status_code, response.text, f"Invalid JSON in response: {e}")
            )

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request."""
        return await self._request("GET", endpoint, params=params)

    async def post(
        self,
        endpoint: str,
        data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a POST request."""
        return await self._request("POST", endpoint, params=params, json_data=data)

    async def put(
        self,
        endpoint: str,
        data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a PUT request."""
        return await self._request("PUT", endpoint, params=params, json_data=data)

    async def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a DELETE request."""
        return await self._request("DELETE", endpoint, params=params)

    async def get_binary(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """Make a GET request and return the raw response bytes (e.g. a PDF)."""
        response = await self._send("GET", endpoint, params=params)
        return response.content

    # Invoice methods
    async def create_invoice(self, invoice_data: Dict[str, Any]) -> Dict[str, Any]:
        """Queue asynchronous invoice creation; returns a task reference."""
        return await self.post("/async/invoices.json", {"invoice": invoice_data})

    async def get_invoice_task_status(self, task_reference_number: str) -> Dict[str, Any]:
        """Fetch the status of an asynchronous invoice task."""
        return await self.get(f"/async/invoices/status/{_path_id(task_reference_number)}.json")

    async def list_invoices(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a list of invoices."""
        return await self.get("/invoices.json", params=params)

    async def get_invoice(self, invoice_uuid: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a specific invoice."""
        return await self.get(f"/invoices/{_path_id(invoice_uuid)}.json", params=params)

    async def update_invoice(self, invoice_uuid: str, invoice_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update a draft invoice."""
        return await self.put(f"/invoices/{_path_id(invoice_uuid)}.json", {"invoice": invoice_data})

    async def delete_invoice(self, invoice_uuid: str) -> None:
        """Delete a draft invoice."""
        await self.delete(f"/invoices/{_path_id(invoice_uuid)}.json")

    async def download_invoice_pdf(self, invoice_uuid: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """Fetch the invoice PDF document."""
        return await self.get_binary(f"/invoices/{_path_id(invoice_uuid)}/pdf.json", params=params)

    async def send_invoice_email(self, invoice_uuid: str, email_data: Dict[str, Any]) -> Any:
        """Deliver the invoice by email."""
        return await self.post(f"/invoices/{_path_id(invoice_uuid)}/deliver_via_email.json", email_data)

    async def mark_invoice_paid(self, invoice_uuid: str, paid_date: str) -> Any:
        """Mark the invoice as paid on the given date."""
        return await self.post(f"/async/invoices/{_path_id(invoice_uuid)}/paid.json", {"paid_date": paid_date})

    # Client methods
    async def list_clients(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a list of clients."""
        return await self.get("/clients.json", params=params)

    async def get_client(self, client_id: Any) -> Dict[str, Any]:
        """Fetch a specific client."""
        return await self.get(f"/clients/{_path_id(client_id)}.json")

    async def create_client(self, client_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new client."""
        return await self.post("/clients.json", {"client": client_data})

    async def update_client(self, client_id: Any, client_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update an existing client."""
        return await self.put(f"/clients/{_path_id(client_id)}.json", {"client": client_data})

    async def delete_client(self, client_id: Any) -> None:
        """Delete a client."""
        await self.delete(f"/clients/{_path_id(client_id)}.json")

    # Product methods
    async def list_products(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a list of products."""
        return await self.get("/products.json", params=params)

    async def get_product(self, product_id: Any) -> Dict[str, Any]:
        """Fetch a specific product."""
        return await self.get(f"/products/{_path_id(product_id)}.json")

    async def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new product."""
        return await self.post("/products.json", {"product": product_data})

    async def update_product(self, product_id: Any, product_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update an existing product."""
        return await self.put(f"/products/{_path_id(product_id)}.json", {"product": product_data})

    async def delete_product(self, product_id: Any) -> None:
        """Delete a product."""
        await self.delete(f"/products/{_path_id(product_id)}.json")

    # Reference data methods
    async def list_vat_rates(self) -> Dict[str, Any]:
        """Fetch available VAT rates."""
        return await self.get("/vat_rates.json")

    async def list_bank_accounts(self) -> Dict[str, Any]:
        """Fetch bank accounts configured for invoices."""
        return await self.get("/bank_accounts.json")

    async def get_account_info(self) -> Dict[str, Any]:
        """Fetch account, plan and limit information."""
        return await self.get("/account.json")

    # Cost document methods
    async def list_costs(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a list of cost documents."""
        return await self.get("/documents/costs.json", params=params)

    async def get_cost(self, cost_uuid: str) -> Dict[str, Any]:
        """Fetch a specific cost document."""
        return await self.get(f"/documents/costs/{_path_id(cost_uuid)}.json")
