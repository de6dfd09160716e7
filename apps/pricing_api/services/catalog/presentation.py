from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from apps.pricing_api.services.catalog.models import CatalogRow


NO_CATEGORY = "Sem categoria"

STATUS_LABELS: Dict[str, str] = {
    "ACTIVE": "Ativo",
    "INACTIVE": "Inativo",
    "MISSING": "Em falta",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def filter_rows(
    rows: Iterable[CatalogRow],
    *,
    query: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    only_in_stock: bool = False,
) -> List[CatalogRow]:
    """
    Same filters the catalog screen offers. Query matches name or external code,
    case-insensitive; "ALL" (or nothing) disables category/status filtering.
    """
    q = (query or "").strip().lower()
    status = (status or "ALL").upper()

    out: List[CatalogRow] = []
    for row in rows:
        if category and category != "ALL" and row.category_name != category:
            continue
        if q and q not in row.name.lower() and q not in row.external_code.lower():
            continue
        if only_in_stock and not row.stock > Decimal("0"):
            continue
        if status != "ALL" and row.status != status:
            continue
        out.append(row)
    return out


def group_by_category(rows: Iterable[CatalogRow]) -> List[Dict[str, Any]]:
    """Categories sorted by name, items sorted by name inside each."""
    grouped: Dict[str, List[CatalogRow]] = {}
    for row in rows:
        grouped.setdefault(row.category_name or NO_CATEGORY, []).append(row)

    return [
        {"name": name, "items": sorted(grouped[name], key=lambda r: r.name)}
        for name in sorted(grouped)
    ]


def category_names(rows: Iterable[CatalogRow]) -> List[str]:
    return sorted({r.category_name for r in rows if r.category_name})


def export_filename(band: Any, extension: str, on: Optional[date] = None) -> str:
    band_value = getattr(band, "value", band)
    day = (on or datetime.now(timezone.utc).date()).isoformat()
    return f"catalogo_{band_value}_{day}.{extension}"
