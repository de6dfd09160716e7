from datetime import date

from apps.pricing_api.services.catalog.flattener import flatten
from apps.pricing_api.services.catalog.presentation import (
    NO_CATEGORY,
    category_names,
    export_filename,
    filter_rows,
    group_by_category,
    status_label,
)
from apps.pricing_api.services.delivery.distance_bands import DistanceBand


def _rows(sample_catalog):
    return flatten(sample_catalog, DistanceBand.UP_TO_2)


def test_filter_by_query_on_name_or_code(sample_catalog) -> None:
    rows = _rows(sample_catalog)
    assert [r.name for r in filter_rows(rows, query="picolé")] == ["Picolé — Uva", "Picolé — Coco"]
    assert [r.name for r in filter_rows(rows, query="sac-0")] == ["Sacolé"]
    assert len(filter_rows(rows, query="   ")) == len(rows)


def test_filter_by_category_status_and_stock(sample_catalog) -> None:
    rows = _rows(sample_catalog)
    assert [r.name for r in filter_rows(rows, category="Bebidas")] == ["Água"]
    assert len(filter_rows(rows, category="ALL")) == len(rows)
    assert [r.name for r in filter_rows(rows, status="MISSING")] == ["Picolé — Coco"]
    assert [r.name for r in filter_rows(rows, status="inactive")] == ["Água"]
    assert [r.name for r in filter_rows(rows, only_in_stock=True)] == ["Sacolé", "Picolé — Uva"]


def test_group_by_category_sorts_everything(sample_catalog) -> None:
    rows = _rows(sample_catalog)
    groups = group_by_category(rows)
    assert [g["name"] for g in groups] == ["Bebidas", "Sorvetes"]
    assert [r.name for r in groups[1]["items"]] == ["Picolé — Coco", "Picolé — Uva", "Sacolé"]


def test_rows_without_category_are_grouped_together(sample_catalog) -> None:
    sample_catalog["categories"][1]["name"] = None
    groups = group_by_category(_rows(sample_catalog))
    assert [g["name"] for g in groups] == [NO_CATEGORY, "Sorvetes"]
    assert category_names(_rows(sample_catalog)) == ["Sorvetes"]


def test_status_label() -> None:
    assert status_label("ACTIVE") == "Ativo"
    assert status_label("INACTIVE") == "Inativo"
    assert status_label("MISSING") == "Em falta"
    assert status_label("UNKNOWN") == "UNKNOWN"


def test_export_filename() -> None:
    assert export_filename(DistanceBand.ABOVE_4, "csv", on=date(2026, 1, 2)) == "catalogo_ABOVE_4_2026-01-02.csv"
    assert export_filename("UP_TO_2", "json", on=date(2026, 1, 2)) == "catalogo_UP_TO_2_2026-01-02.json"
