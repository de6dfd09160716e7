import dataclasses
import logging

from apps.pricing_api.services import catalog_service
from apps.pricing_api.services.delivery.distance_bands import DistanceBand


def _explain_lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "pricing_api.pricing"]


def test_snapshot_prices_rows_for_band(fake_client) -> None:
    snap = catalog_service.snapshot_catalog(DistanceBand.ABOVE_4, client=fake_client)
    assert snap.band is DistanceBand.ABOVE_4
    assert str(snap.keeta_fee) == "2.50"
    assert len(snap.rows) == 4
    assert fake_client.calls == 1


def test_debug_pricing_explains_first_row_per_channel(monkeypatch, caplog, fake_client) -> None:
    debug = dataclasses.replace(catalog_service.settings, DEBUG_PRICING=True)
    monkeypatch.setattr(catalog_service, "settings", debug)
    caplog.set_level(logging.DEBUG, logger="pricing_api.pricing")

    catalog_service.snapshot_catalog(DistanceBand.FROM_2_TO_4, client=fake_client)

    lines = _explain_lines(caplog)
    assert len(lines) == 3
    assert all(line.startswith("pricing explain") for line in lines)
    assert "'channel': 'Keeta'" in lines[2]
    # Sacolé 3.00 on Keeta with the 1.50 band fee
    assert "'channel_price': '5.90'" in lines[2]


def test_explain_is_silent_without_debug_pricing(monkeypatch, caplog, fake_client) -> None:
    quiet = dataclasses.replace(catalog_service.settings, DEBUG_PRICING=False)
    monkeypatch.setattr(catalog_service, "settings", quiet)
    caplog.set_level(logging.DEBUG, logger="pricing_api.pricing")

    catalog_service.snapshot_catalog(DistanceBand.UP_TO_2, client=fake_client)

    assert _explain_lines(caplog) == []
