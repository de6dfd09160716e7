"""
Keeta distance bands.

The delivery fee charged by Keeta depends on distance. Instead of routing each
order we pick a coarse band, assume its average distance and multiply by the
cost per km. Static configuration, not live routing data.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Optional, Union


D = Decimal


class DistanceBand(str, Enum):
    UP_TO_2 = "UP_TO_2"
    FROM_2_TO_4 = "FROM_2_TO_4"
    ABOVE_4 = "ABOVE_4"


DEFAULT_BAND = DistanceBand.UP_TO_2

KM_AVG: Dict[str, Decimal] = {
    DistanceBand.UP_TO_2.value: D("1.5"),
    DistanceBand.FROM_2_TO_4.value: D("3.0"),
    DistanceBand.ABOVE_4.value: D("5.0"),
}

COST_PER_KM: Dict[str, Decimal] = {
    DistanceBand.UP_TO_2.value: D("0.5"),
    DistanceBand.FROM_2_TO_4.value: D("0.5"),
    DistanceBand.ABOVE_4.value: D("0.5"),
}

BAND_LABELS: Dict[str, str] = {
    DistanceBand.UP_TO_2.value: "Até 2km",
    DistanceBand.FROM_2_TO_4.value: "De 2 a 4km",
    DistanceBand.ABOVE_4.value: "Acima de 4km",
}


def _band_key(band: Any) -> str:
    if isinstance(band, DistanceBand):
        return band.value
    return str(band) if band is not None else ""


def fee_for_band(band: Union[DistanceBand, str, None]) -> Decimal:
    """
    Flat delivery fee for a band: avg km * cost per km, rounded to cents.
    Unknown bands cost 0; callers own band validity.
    """
    key = _band_key(band)
    km_avg = KM_AVG.get(key, D("0"))
    cost_per_km = COST_PER_KM.get(key, D("0"))
    return (km_avg * cost_per_km).quantize(D("0.01"), rounding=ROUND_HALF_UP)


def parse_band(value: Optional[str], default: Union[DistanceBand, str] = DEFAULT_BAND) -> DistanceBand:
    if value is not None:
        try:
            return DistanceBand(value)
        except ValueError:
            pass
    try:
        return DistanceBand(_band_key(default))
    except ValueError:
        return DEFAULT_BAND


def band_options() -> list[Dict[str, Any]]:
    return [
        {
            "value": band.value,
            "label": BAND_LABELS[band.value],
            "fee": float(fee_for_band(band)),
        }
        for band in DistanceBand
    ]
