"""Input validation for tool arguments.

Every validator either returns normally or raises ValidationError naming the
offending field. Nested failures carry the full path from the top-level
argument, e.g. ``services[1].tax_symbol``.
"""

import datetime
import math
import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)

MAX_PAGE_SIZE = 100
PRICE_FIELDS = ("net_price", "unit_net_price", "gross_price")

ItemValidator = Callable[[Any, int], None]


class ValidationError(McpError):
    """Tool argument failed validation before any request was made."""

    def __init__(self, field: str, detail: str) -> None:
        super().__init__(
            ErrorData(code=INVALID_PARAMS, message=f"Validation error for '{field}': {detail}")
        )
        self.field = field
        self.detail = detail


class ContainerValidationError(ValidationError):
    """Raised by an item validator for a failure that belongs to the whole array."""

    def __init__(self, detail: str) -> None:
        super().__init__("", detail)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_required_string(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string")
    return value


def validate_positive_number(value: Any, field: str) -> float:
    if not _is_number(value) or value <= 0:
        raise ValidationError(field, "must be a positive number")
    return value


def validate_non_negative_number(value: Any, field: str) -> float:
    if not _is_number(value) or value < 0:
        raise ValidationError(field, "must be a non-negative number")
    return value


def validate_date_string(value: Any, field: str) -> str:
    """Check a YYYY-MM-DD string that names a real calendar day."""
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if not DATE_PATTERN.fullmatch(value):
        raise ValidationError(field, "must be in YYYY-MM-DD format")

    year, month, day = (int(part) for part in value.split("-"))
    try:
        parsed = datetime.date(year, month, day)
    except ValueError:
        raise ValidationError(field, "is not a valid date") from None
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        raise ValidationError(field, "is not a valid date")
    return value


def validate_email(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValidationError(field, "is not a valid email address")
    return value


def validate_uuid(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if not UUID_PATTERN.fullmatch(value):
        raise ValidationError(field, "is not a valid UUID")
    return value


def validate_enum(value: Any, field: str, allowed: Iterable[str]) -> str:
    allowed = tuple(allowed)
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if value not in allowed:
        raise ValidationError(field, f"must be one of: {', '.join(allowed)}")
    return value


def validate_array(value: Any, field: str, item_validator: Optional[ItemValidator] = None) -> list:
    """Check a non-empty list, optionally validating every item.

    Item failures are re-raised with the path ``field[index].inner``; an item
    validator that raises ContainerValidationError reports against ``field``.
    """
    if not isinstance(value, list):
        raise ValidationError(field, "must be an array")
    if not value:
        raise ValidationError(field, "must not be empty")

    if item_validator is not None:
        for index, item in enumerate(value):
            try:
                item_validator(item, index)
            except ContainerValidationError as e:
                raise ValidationError(field, e.detail) from None
            except ValidationError as e:
                path = f"{field}[{index}].{e.field}" if e.field else f"{field}[{index}]"
                raise ValidationError(path, e.detail) from None
    return value


def validate_tax_symbol(value: Any, field: str = "tax_symbol") -> Any:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(field, "is required and must be a string or number")
    return value


def validate_invoice_service(value: Any, index: int) -> None:
    """Validate one invoice line item (service)."""
    if not isinstance(value, dict):
        raise ValidationError("", "must be an object")

    validate_required_string(value.get("name"), "name")
    validate_tax_symbol(value.get("tax_symbol"))

    for price_field in PRICE_FIELDS:
        if value.get(price_field) is not None:
            validate_non_negative_number(value[price_field], price_field)
    if value.get("quantity") is not None:
        validate_positive_number(value["quantity"], "quantity")

    if all(value.get(price_field) is None for price_field in PRICE_FIELDS):
        raise ContainerValidationError(
            "each service must have at least one of: net_price, unit_net_price, or gross_price"
        )


def validate_pagination_params(params: Mapping[str, Any]) -> None:
    """offset >= 0 and 0 < limit <= 100 when present. Oversized limits are rejected, not clamped."""
    if params.get("offset") is not None:
        validate_non_negative_number(params["offset"], "offset")

    if params.get("limit") is not None:
        validate_positive_number(params["limit"], "limit")
        if params["limit"] > MAX_PAGE_SIZE:
            raise ValidationError("limit", f"must not exceed {MAX_PAGE_SIZE}")


def validate_required_fields(data: Mapping[str, Any], required: Iterable[str]) -> None:
    for field in required:
        if data.get(field) is None:
            raise ValidationError(field, "is required")


def sanitize_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop None values so empty filters are never sent."""
    return {key: value for key, value in params.items() if value is not None}
