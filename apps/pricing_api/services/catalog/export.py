"""
Catalog exports: JSON document and spreadsheet-friendly CSV.

CSV layout is fixed: every field quoted, quotes doubled, line breaks inside a
field flattened to one space, rows joined by "\n" with no trailing newline.
"""

from __future__ import annotations

import csv
import io
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from apps.pricing_api.services.catalog.models import CatalogRow
from apps.pricing_api.services.delivery.distance_bands import DistanceBand


CSV_COLUMNS: Sequence[str] = (
    "category_name",
    "name",
    "description",
    "external_code",
    "stock",
    "price_base",
    "price_ifood",
    "price_99food",
    "price_keeta",
    "image_url",
    "thumbnail_url",
    "km_band",
    "keeta_fee",
)

_LINE_BREAK = re.compile(r"\r?\n")


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _band_value(band: Any) -> str:
    return band.value if isinstance(band, DistanceBand) else str(band)


def escape_csv(value: Any) -> str:
    text = "" if value is None else str(value)
    cleaned = _LINE_BREAK.sub(" ", text).replace('"', '""')
    return f'"{cleaned}"'


def csv_record(row: CatalogRow, band: Any, keeta_fee: Decimal) -> Dict[str, Any]:
    return {
        "category_name": row.category_name,
        "name": row.name,
        "description": row.description,
        "external_code": row.external_code,
        "stock": row.stock,
        "price_base": row.price,
        "price_ifood": row.price_ifood,
        "price_99food": row.price_99food,
        "price_keeta": row.price_keeta,
        "image_url": row.image_url,
        "thumbnail_url": row.thumbnail_url,
        "km_band": _band_value(band),
        "keeta_fee": keeta_fee,
    }


def to_csv(rows: Iterable[CatalogRow], band: Any, keeta_fee: Decimal) -> str:
    records = [csv_record(r, band, keeta_fee) for r in rows]
    if not records:
        return ""

    header = ",".join(escape_csv(c) for c in CSV_COLUMNS)
    lines = [",".join(escape_csv(rec[c]) for c in CSV_COLUMNS) for rec in records]
    return "\n".join([header, *lines])


def parse_csv(text: str) -> List[Dict[str, str]]:
    """Reads back what to_csv writes."""
    if not text:
        return []
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return [dict(r) for r in reader]


def to_json_export(
    rows: Iterable[CatalogRow],
    band: Any,
    keeta_fee: Decimal,
    exported_at: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "exported_at": exported_at or _utcnow(),
        "km_band": _band_value(band),
        "keeta_fee": float(keeta_fee),
        "items": [r.to_dict() for r in rows],
    }
