from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def format_decimal(value: Any) -> str:
    """Render a numeric form value without scientific notation."""

    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")

    formatted = f"{number:f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".") or "0"
    return formatted
