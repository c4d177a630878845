"""Currency conversion between grosze and PLN.

The inFakt API returns every monetary value in grosze (1/100 PLN). Tool
output shows PLN, so responses are converted once, on the way out.
"""

import copy
import math
from typing import Any, Dict, Iterable, Optional, Union

MONETARY_FIELDS = frozenset(
    {
        "net_price",
        "gross_price",
        "tax_price",
        "unit_net_price",
        "unit_gross_price",
        "price",
        "amount",
        "total",
        "value",
    }
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_number(value: Any) -> Optional[float]:
    """Return value as a float when it is numeric or a numeric-looking string."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def grosze_to_pln(grosze: Union[int, float, str]) -> float:
    """Convert grosze to PLN with 2 decimal places.

    Example:
        grosze_to_pln(12345) -> 123.45
    """
    number = _as_number(grosze)
    if number is None:
        raise ValueError(f"Not a monetary amount: {grosze!r}")
    return _round_half_up(number) / 100


def pln_to_grosze(pln: Union[int, float]) -> int:
    """Convert PLN to integer grosze.

    Example:
        pln_to_grosze(123.45) -> 12345
    """
    number = _as_number(pln)
    if number is None:
        raise ValueError(f"Not a monetary amount: {pln!r}")
    return _round_half_up(number * 100)


def format_grosze(grosze: Union[int, float, str]) -> str:
    """Render a grosze amount as a PLN string, e.g. '123.45 PLN'."""
    return f"{grosze_to_pln(grosze):.2f} PLN"


def convert_monetary_fields(obj: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of obj with the given top-level fields converted to PLN."""
    converted = dict(obj)
    for field in fields:
        if field in converted and _as_number(converted[field]) is not None:
            converted[field] = grosze_to_pln(converted[field])
    return converted


def convert_all_monetary_fields(data: Any) -> Any:
    """Recursively convert every recognized monetary field to PLN.

    Lists are walked element-wise and dicts key-wise. A recognized key whose
    value is not numeric (None, bool, nested object) is copied unchanged.
    The input is never mutated and shares no containers with the result.
    """
    if isinstance(data, list):
        return [convert_all_monetary_fields(item) for item in data]

    if isinstance(data, dict):
        converted: Dict[str, Any] = {}
        for key, value in data.items():
            if key in MONETARY_FIELDS:
                if _as_number(value) is not None:
                    converted[key] = grosze_to_pln(value)
                else:
                    converted[key] = copy.deepcopy(value)
            else:
                converted[key] = convert_all_monetary_fields(value)
        return converted

    return data
