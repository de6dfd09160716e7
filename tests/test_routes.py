import json

import pytest
from fastapi.testclient import TestClient

from apps.pricing_api.main import app
from apps.pricing_api.services import catalog_service
from apps.pricing_api.services.cardapioweb_client import CatalogConfigError, CatalogFetchError


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def partner(monkeypatch, fake_client):
    monkeypatch.setattr(catalog_service, "get_client", lambda: fake_client)
    return fake_client


def test_root_and_health(client) -> None:
    assert client.get("/health").json() == {"ok": True}
    body = client.get("/").json()
    assert "/catalog" in body["routes"]


def test_catalog_prices_rows_for_band(client, partner) -> None:
    r = client.get("/catalog", params={"km_band": "FROM_2_TO_4"})
    assert r.status_code == 200

    body = r.json()
    assert body["km_band"] == "FROM_2_TO_4"
    assert body["keeta_fee"] == 1.5
    assert [i["name"] for i in body["items"]] == ["Sacolé", "Picolé — Uva", "Picolé — Coco", "Água"]
    assert body["items"][0]["price_keeta"] == 5.9
    assert partner.calls == 1


def test_unknown_band_falls_back_to_default(client, partner) -> None:
    body = client.get("/catalog", params={"km_band": "FAR_AWAY"}).json()
    assert body["km_band"] == "UP_TO_2"
    assert body["keeta_fee"] == 0.75


def test_catalog_filters(client, partner) -> None:
    body = client.get("/catalog", params={"q": "picolé", "in_stock": "true"}).json()
    assert [i["name"] for i in body["items"]] == ["Picolé — Uva"]

    body = client.get("/catalog", params={"status": "INACTIVE"}).json()
    assert [i["name"] for i in body["items"]] == ["Água"]


def test_catalog_grouped(client, partner) -> None:
    body = client.get("/catalog/grouped", params={"km_band": "ABOVE_4"}).json()
    assert body["keeta_fee"] == 2.5
    assert [c["name"] for c in body["categories"]] == ["Bebidas", "Sorvetes"]
    assert [i["name"] for i in body["categories"][1]["items"]] == ["Picolé — Coco", "Picolé — Uva", "Sacolé"]


def test_retrieval_failure_envelope(client, monkeypatch) -> None:
    def broken():
        raise CatalogConfigError("Missing env CARDAPIOWEB_BASE_URL")

    monkeypatch.setattr(catalog_service, "get_client", broken)
    r = client.get("/catalog")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch catalog", "message": "Missing env CARDAPIOWEB_BASE_URL"}


def test_upstream_error_on_export(client, monkeypatch) -> None:
    class Failing:
        def fetch_catalog(self):
            raise CatalogFetchError("CardapioWeb API error 503: maintenance")

    monkeypatch.setattr(catalog_service, "get_client", lambda: Failing())
    r = client.get("/catalog/export.csv")
    assert r.status_code == 500
    assert r.json()["message"] == "CardapioWeb API error 503: maintenance"


def test_bands(client) -> None:
    body = client.get("/catalog/bands").json()
    assert body["ok"] is True
    assert [b["fee"] for b in body["data"]] == [0.75, 1.5, 2.5]


def test_export_csv(client, partner) -> None:
    r = client.get("/catalog/export.csv", params={"km_band": "ABOVE_4"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="catalogo_ABOVE_4_' in r.headers["content-disposition"]

    lines = r.text.split("\n")
    assert lines[0].startswith('"category_name","name"')
    assert len(lines) == 5
    assert lines[1].endswith('"ABOVE_4","2.50"')


def test_export_json(client, partner) -> None:
    r = client.get("/catalog/export.json", params={"km_band": "UP_TO_2"})
    assert r.status_code == 200
    assert r.headers["content-disposition"].endswith('.json"')

    doc = json.loads(r.content)
    assert set(doc) == {"exported_at", "km_band", "keeta_fee", "items"}
    assert doc["km_band"] == "UP_TO_2"
    assert doc["keeta_fee"] == 0.75
    assert len(doc["items"]) == 4


def test_health_config_reports_presence_only(client) -> None:
    body = client.get("/health/config").json()
    assert body["ok"] is True
    assert isinstance(body["cardapioweb_api_key"], bool)
    assert body["default_km_band"] == "UP_TO_2"


def test_request_log_masks_api_key() -> None:
    from apps.pricing_api.services.admin.logger import _mask_headers

    masked = _mask_headers({"X-API-KEY": "secret", "Accept": "application/json"})
    assert masked == {"X-API-KEY": "***masked***", "Accept": "application/json"}
