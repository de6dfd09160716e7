"""
Catalog Flattener (Canonical)
=============================

Turns the partner tree (categories -> items -> option groups -> options) into
one priced CatalogRow per sellable unit, in document order.

Rules:
- An item with at least one option is sold through its options only: one row
  per option, the item itself is never emitted (flavors, sizes...).
- An option priced 0 inherits the item's price (variants without a surcharge).
- An item without options is emitted once, and only when its price is > 0.

Non-goals:
- No I/O, no sorting (consumers may re-sort).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List

from apps.pricing_api.services.catalog.coerce import (
    ZERO,
    children,
    field,
    first_present,
    image_fields,
    to_number,
    to_text,
)
from apps.pricing_api.services.catalog.models import CatalogRow
from apps.pricing_api.services.delivery.distance_bands import DistanceBand, fee_for_band
from apps.pricing_api.services.pricing.pricing_engine import price_for_channels

log = logging.getLogger("pricing_api.flattener")

UNKNOWN_STATUS = "UNKNOWN"


def _build_row(
    *,
    category_name: str,
    name: str,
    description: str,
    external_code: str,
    price: Decimal,
    stock: Decimal,
    image_url: str,
    thumbnail_url: str,
    status: str,
    keeta_fixed_fee: Decimal,
) -> CatalogRow:
    prices = price_for_channels(price, keeta_fixed_fee)
    return CatalogRow(
        category_name=category_name,
        name=name,
        description=description,
        external_code=external_code,
        price=price,
        stock=stock,
        image_url=image_url,
        thumbnail_url=thumbnail_url,
        status=status,
        price_ifood=prices["price_ifood"],
        price_99food=prices["price_99food"],
        price_keeta=prices["price_keeta"],
    )


def _option_name(item: Any, option: Any) -> str:
    parent_name = to_text(field(item, "name")).strip()
    option_name = to_text(field(option, "name")).strip()
    if parent_name and option_name:
        return f"{parent_name} — {option_name}"
    return option_name or parent_name


def _option_row(category_name: str, item: Any, option: Any, keeta_fixed_fee: Decimal) -> CatalogRow:
    description = (
        to_text(field(option, "description")).strip()
        or to_text(field(item, "description")).strip()
    )

    item_code = to_text(first_present(field(item, "external_code"), field(item, "id")))
    external_code = (
        to_text(field(option, "external_code")).strip()
        or f"{item_code}:{to_text(field(option, 'id'))}"
    )

    option_price = to_number(field(option, "price"))
    price = option_price if option_price > ZERO else to_number(field(item, "price"))

    option_image = image_fields(option)
    item_image = image_fields(item)

    return _build_row(
        category_name=category_name,
        name=_option_name(item, option),
        description=description,
        external_code=external_code,
        price=price,
        stock=to_number(field(option, "stock")),
        image_url=to_text(first_present(option_image["image_url"], item_image["image_url"])),
        thumbnail_url=to_text(first_present(option_image["thumbnail_url"], item_image["thumbnail_url"])),
        status=to_text(first_present(field(option, "status"), field(item, "status"), UNKNOWN_STATUS)),
        keeta_fixed_fee=keeta_fixed_fee,
    )


def _item_row(category_name: str, item: Any, price: Decimal, keeta_fixed_fee: Decimal) -> CatalogRow:
    image = image_fields(item)
    return _build_row(
        category_name=category_name,
        name=to_text(field(item, "name")),
        description=to_text(field(item, "description")),
        external_code=to_text(first_present(field(item, "external_code"), field(item, "id"))),
        price=price,
        stock=to_number(field(item, "stock")),
        image_url=to_text(image["image_url"]),
        thumbnail_url=to_text(image["thumbnail_url"]),
        status=to_text(first_present(field(item, "status"), UNKNOWN_STATUS)),
        keeta_fixed_fee=keeta_fixed_fee,
    )


def flatten(catalog: Any, band: DistanceBand | str) -> List[CatalogRow]:
    keeta_fixed_fee = fee_for_band(band)
    rows: List[CatalogRow] = []

    for category in children(catalog, "categories"):
        category_name = to_text(field(category, "name"))

        for item in children(category, "items"):
            pushed_any_option = False

            for group in children(item, "option_groups"):
                for option in children(group, "options"):
                    rows.append(_option_row(category_name, item, option, keeta_fixed_fee))
                    pushed_any_option = True

            if pushed_any_option:
                continue

            item_price = to_number(field(item, "price"))
            if item_price > ZERO:
                rows.append(_item_row(category_name, item, item_price, keeta_fixed_fee))

    log.debug("Flattened catalog into %s rows (band=%s, keeta_fee=%s)", len(rows), band, keeta_fixed_fee)
    return rows
