from __future__ import annotations

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict


def _json_number(v: Decimal) -> Any:
    """Decimals go out as JSON numbers; whole values stay integral."""
    if v == v.to_integral_value():
        return int(v)
    return float(v)


@dataclass(frozen=True)
class CatalogRow:
    """
    One sellable unit: a whole item, or one option of an item.

    Currency fields are Decimal in BRL. Created by the flattener, never mutated.
    """

    category_name: str
    name: str
    description: str
    external_code: str
    price: Decimal
    stock: Decimal
    image_url: str
    thumbnail_url: str
    status: str

    price_ifood: Decimal
    price_99food: Decimal
    price_keeta: Decimal

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for k, v in asdict(self).items():
            out[k] = _json_number(v) if isinstance(v, Decimal) else v
        return out
