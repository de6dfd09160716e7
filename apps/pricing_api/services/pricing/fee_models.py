"""
Channel Fee Models (Canonical)
==============================

Single source of truth for what each sales channel takes from a sale.

- percent_total is the combined commission + payment processing rate,
  already summed by the channel (no sub-fee breakdown).
- fixed_fee is charged per sale, in BRL.
- rounding decides how the channel-facing price is displayed.

Non-goals:
- No DB access, no HTTP.
- Keeta's fixed fee lives here as 0; the distance-band fee is applied per
  request by deriving a new FeeModel (see with_fixed_fee).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping


D = Decimal

Channel = Literal["ifood", "food99", "keeta"]
RoundingMode = Literal["NONE", "END_90", "END_99"]

CHANNELS: tuple[Channel, ...] = ("ifood", "food99", "keeta")


@dataclass(frozen=True)
class FeeModel:
    label: str
    percent_total: Decimal  # 0.272 = 27.2%
    fixed_fee: Decimal = D("0")
    rounding: RoundingMode = "END_90"

    def with_fixed_fee(self, fixed_fee: Decimal) -> "FeeModel":
        """Request-scoped variant; the registry entry is never touched."""
        return replace(self, fixed_fee=D(str(fixed_fee)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "percent_total": str(self.percent_total),
            "fixed_fee": str(self.fixed_fee.quantize(D("0.01"), rounding=ROUND_HALF_UP)),
            "rounding": self.rounding,
        }


PLATFORM_FEES: Mapping[str, FeeModel] = MappingProxyType({
    "ifood": FeeModel(
        label="iFood",
        percent_total=D("0.272"),  # 24% + 3.2%
        fixed_fee=D("0.99"),  # service fee
        rounding="END_90",
    ),
    "food99": FeeModel(
        label="99Food",
        percent_total=D("0.2369"),  # 22.1% + 1.59%
        fixed_fee=D("0"),
        rounding="END_90",
    ),
    "keeta": FeeModel(
        label="Keeta",
        percent_total=D("0.174"),  # 17.4% combined
        fixed_fee=D("0"),  # replaced by the distance-band delivery fee
        rounding="END_90",
    ),
})


def lookup(channel: str) -> FeeModel:
    return PLATFORM_FEES[channel]
