"""
Coercion helpers for the loosely shaped partner payload.

Every field in the CardapioWeb catalog may be missing, null, or carry a number
as text ("12,50"). These helpers turn such values into safe defaults instead of
raising.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping


D = Decimal

ZERO = D("0")

# Largest decimal exponent accepted as a money or stock amount (< 10^13).
MAX_EXPONENT = 12


def _bounded(d: Decimal) -> Decimal:
    if not d.is_finite() or d.adjusted() > MAX_EXPONENT:
        return ZERO
    return d


def to_number(v: Any) -> Decimal:
    """
    Finite number -> itself, numeric text -> parsed (decimal comma accepted),
    anything else (including absurdly large values) -> 0.
    """
    if isinstance(v, bool):
        return ZERO
    if isinstance(v, (int, float, Decimal)):
        d = D(str(v))
        return _bounded(d)
    if isinstance(v, str):
        text = v.strip().replace(",", ".", 1)
        if not text:
            return ZERO
        if "_" in text:
            return ZERO
        try:
            d = D(text)
        except InvalidOperation:
            return ZERO
        return _bounded(d)
    return ZERO


def to_text(v: Any) -> str:
    return "" if v is None else str(v)


def field(node: Any, key: str) -> Any:
    """Optional field access: non-mapping nodes behave like empty ones."""
    if isinstance(node, Mapping):
        return node.get(key)
    return None


def first_present(*values: Any) -> Any:
    """First value that is not None (the `a ?? b` rule)."""
    for v in values:
        if v is not None:
            return v
    return None


def children(node: Any, key: str) -> List[Any]:
    items = field(node, key)
    if isinstance(items, list):
        return items
    return []


def image_fields(node: Any) -> Dict[str, Any]:
    image = field(node, "image")
    return {
        "image_url": field(image, "image_url"),
        "thumbnail_url": field(image, "thumbnail_url"),
    }
