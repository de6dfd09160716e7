from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from apps.pricing_api.services.cardapioweb_client import CardapioWebClient
from apps.pricing_api.services.catalog.flattener import flatten
from apps.pricing_api.services.catalog.models import CatalogRow
from apps.pricing_api.services.delivery.distance_bands import DistanceBand, fee_for_band
from apps.pricing_api.services.pricing.fee_models import CHANNELS, lookup
from apps.pricing_api.services.pricing.pricing_engine import explain
from apps.pricing_api.settings import settings

log = logging.getLogger("pricing_api.catalog_service")


@dataclass(frozen=True)
class CatalogSnapshot:
    band: DistanceBand
    keeta_fee: Decimal
    rows: List[CatalogRow]

    def to_dict(self, rows: Optional[List[CatalogRow]] = None) -> Dict[str, Any]:
        return {
            "items": [r.to_dict() for r in (self.rows if rows is None else rows)],
            "km_band": self.band.value,
            "keeta_fee": float(self.keeta_fee),
        }


def get_client() -> CardapioWebClient:
    return CardapioWebClient(
        settings.CARDAPIOWEB_BASE_URL,
        settings.CARDAPIOWEB_API_KEY,
        timeout=settings.CARDAPIOWEB_TIMEOUT_SECONDS,
        max_retries=settings.CARDAPIOWEB_MAX_RETRIES,
    )


def _explain_first_row(rows: List[CatalogRow], keeta_fee: Decimal) -> None:
    """One explain line per channel, for the first priced row only."""
    if not rows:
        return
    base = rows[0].price
    for channel in CHANNELS:
        fee = lookup(channel)
        if channel == "keeta":
            fee = fee.with_fixed_fee(keeta_fee)
        explain(base, fee)


def snapshot_catalog(band: DistanceBand, client: Optional[CardapioWebClient] = None) -> CatalogSnapshot:
    """
    Fetch the partner catalog and price it for the given Keeta band.
    Retrieval errors (CatalogError) propagate to the caller.
    """
    client = client or get_client()
    raw = client.fetch_catalog()
    rows = flatten(raw, band)
    keeta_fee = fee_for_band(band)
    log.info("Catalog priced: %s rows, km_band=%s, keeta_fee=%s", len(rows), band.value, keeta_fee)
    if settings.DEBUG_PRICING:
        _explain_first_row(rows, keeta_fee)
    return CatalogSnapshot(band=band, keeta_fee=keeta_fee, rows=rows)
