# apps/pricing_api/routes/catalog.py
# =====================================================
# Catalog Routes
#
#   GET /catalog?km_band=&q=&category=&status=&in_stock=
#   GET /catalog/grouped       -> same filters, grouped by category
#   GET /catalog/bands         -> Keeta distance bands + fees
#   GET /catalog/export.json   -> unfiltered catalog download
#   GET /catalog/export.csv    -> unfiltered catalog download (Excel)
#
# Env keys:
#   CARDAPIOWEB_BASE_URL, CARDAPIOWEB_API_KEY (required)
#   DEFAULT_KM_BAND=UP_TO_2 (optional)
# =====================================================

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import Response

from apps.pricing_api.routes.schemas import CatalogResponse, GroupedCatalogResponse
from apps.pricing_api.services import catalog_service
from apps.pricing_api.services.cardapioweb_client import CatalogError
from apps.pricing_api.services.catalog.export import to_csv, to_json_export
from apps.pricing_api.services.catalog.presentation import (
    filter_rows,
    group_by_category,
    export_filename,
)
from apps.pricing_api.services.delivery.distance_bands import band_options, parse_band
from apps.pricing_api.settings import settings
from apps.pricing_api.utils.envelope import catalog_failure, ok

log = logging.getLogger("pricing_api.catalog")

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _snapshot(km_band: Optional[str]):
    band = parse_band(km_band, default=settings.DEFAULT_KM_BAND)
    return catalog_service.snapshot_catalog(band)


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


# Sync handlers: retrieval blocks (requests), FastAPI runs them in its threadpool.

@router.get("", response_model=CatalogResponse)
def get_catalog(
    km_band: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    status: str = Query(default="ALL"),
    in_stock: bool = Query(default=False),
):
    try:
        snap = _snapshot(km_band)
    except CatalogError as e:
        log.exception("Catalog retrieval failed")
        return catalog_failure(e.message)

    rows = filter_rows(snap.rows, query=q, category=category, status=status, only_in_stock=in_stock)
    return snap.to_dict(rows)


@router.get("/grouped", response_model=GroupedCatalogResponse)
def get_catalog_grouped(
    km_band: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    status: str = Query(default="ALL"),
    in_stock: bool = Query(default=False),
):
    try:
        snap = _snapshot(km_band)
    except CatalogError as e:
        log.exception("Catalog retrieval failed")
        return catalog_failure(e.message)

    rows = filter_rows(snap.rows, query=q, category=category, status=status, only_in_stock=in_stock)
    categories = [
        {"name": g["name"], "items": [r.to_dict() for r in g["items"]]}
        for g in group_by_category(rows)
    ]
    return {
        "km_band": snap.band.value,
        "keeta_fee": float(snap.keeta_fee),
        "categories": categories,
    }


@router.get("/bands")
def get_bands():
    return ok(band_options(), meta={"default": parse_band(None, default=settings.DEFAULT_KM_BAND).value})


@router.get("/export.json")
def export_json(km_band: Optional[str] = Query(default=None)):
    try:
        snap = _snapshot(km_band)
    except CatalogError as e:
        log.exception("Catalog export (json) failed")
        return catalog_failure(e.message)

    payload = to_json_export(snap.rows, snap.band, snap.keeta_fee)
    return Response(
        content=json.dumps(payload, ensure_ascii=False, indent=2),
        media_type="application/json; charset=utf-8",
        headers=_attachment(export_filename(snap.band, "json")),
    )


@router.get("/export.csv")
def export_csv(km_band: Optional[str] = Query(default=None)):
    try:
        snap = _snapshot(km_band)
    except CatalogError as e:
        log.exception("Catalog export (csv) failed")
        return catalog_failure(e.message)

    return Response(
        content=to_csv(snap.rows, snap.band, snap.keeta_fee),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(export_filename(snap.band, "csv")),
    )
