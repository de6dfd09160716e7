"""
Pricing Engine (Canonical)
=========================

Purpose:
- Compute the price to list on a sales channel so that, after the channel
  takes its percentage and fixed fee, the merchant still nets the base price.

      channel_price * (1 - percent_total) - fixed_fee = base_price
  =>  channel_price = (base_price + fixed_fee) / (1 - percent_total)

- Apply the channel's display rounding without ever going below that gross
  price (rounding must not eat into the margin).

Non-goals:
- No discounting, no multi-currency.
- Degenerate inputs never raise: see price().

Works with fee_models.FeeModel.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Optional

from .fee_models import FeeModel, lookup


D = Decimal

log = logging.getLogger("pricing_api.pricing")

ENDINGS: Dict[str, Decimal] = {
    "END_90": D("0.90"),
    "END_99": D("0.99"),
}

# Digits available while pricing; quantizing to cents needs the whole integer part.
PRECISION = 60


def _q2(x: Decimal) -> Decimal:
    """Quantize to 2 decimals like currency."""
    return x.quantize(D("0.01"), rounding=ROUND_HALF_UP)


def _to_decimal(v: Any) -> Optional[Decimal]:
    if isinstance(v, bool) or v is None:
        return None
    if isinstance(v, Decimal):
        return v
    try:
        return D(str(v))
    except (InvalidOperation, ValueError):
        return None


def _fee_decimal(v: Any) -> Decimal:
    return _to_decimal(v) or D("0")


def round_to_ending(value: Decimal, ending: Decimal) -> Decimal:
    """
    Smallest price of the form N + ending that is >= value.
    5.448 -> 5.90, 5.95 -> 6.90 (for ending 0.90).
    """
    whole = value.to_integral_value(rounding=ROUND_FLOOR)
    candidate = whole + ending
    if candidate >= value:
        return candidate
    return whole + D("1") + ending


class PricingEngine:
    """
    Reverse-margin pricing.

    Usage:
        PricingEngine().price(D("10.00"), lookup("ifood"))  # -> Decimal("15.90")
    """

    def price(self, base_price: Any, fee: FeeModel) -> Any:
        # 100%+ commission: nothing sensible to solve for, pass through
        if fee.percent_total >= D("1"):
            return base_price

        base = _to_decimal(base_price)
        if base is None or not base.is_finite() or base <= D("0"):
            return D("0.00")

        with localcontext() as ctx:
            ctx.prec = PRECISION
            try:
                gross = (base + _fee_decimal(fee.fixed_fee)) / (D("1") - _fee_decimal(fee.percent_total))
                return _q2(self._round_price(gross, fee))
            except InvalidOperation:
                log.warning("Base price %s out of range for %s, priced as 0", base, fee.label)
                return D("0.00")

    def _round_price(self, gross: Decimal, fee: FeeModel) -> Decimal:
        ending = ENDINGS.get(fee.rounding)
        if ending is None:
            return _q2(gross)
        return round_to_ending(gross, ending)

    def net_proceeds(self, channel_price: Any, fee: FeeModel) -> Decimal:
        """What the merchant keeps after the channel's cut."""
        price = _to_decimal(channel_price) or D("0")
        if not price.is_finite():
            return D("0.00")
        with localcontext() as ctx:
            ctx.prec = PRECISION
            try:
                return _q2(price * (D("1") - _fee_decimal(fee.percent_total)) - _fee_decimal(fee.fixed_fee))
            except InvalidOperation:
                return D("0.00")

    def explain(self, base_price: Any, fee: FeeModel) -> Dict[str, str]:
        """
        Human-readable, stable key output for logs/admin UIs.
        """
        price = self.price(base_price, fee)
        out = {
            "channel": fee.label,
            "base_price": str(base_price),
            "channel_price": str(price),
            "net_proceeds": str(self.net_proceeds(price, fee)),
        }
        log.debug("pricing explain %s", out)
        return out


_engine = PricingEngine()


def channel_price(base_price: Any, fee: FeeModel) -> Any:
    return _engine.price(base_price, fee)


def net_proceeds(price: Any, fee: FeeModel) -> Decimal:
    return _engine.net_proceeds(price, fee)


def explain(base_price: Any, fee: FeeModel) -> Dict[str, str]:
    return _engine.explain(base_price, fee)


def price_for_channels(base_price: Decimal, keeta_fixed_fee: Decimal) -> Dict[str, Decimal]:
    """
    Prices on all three channels. Keeta gets a request-scoped copy of its fee
    model carrying the distance-band delivery fee.
    """
    keeta = lookup("keeta").with_fixed_fee(keeta_fixed_fee)
    return {
        "price_ifood": channel_price(base_price, lookup("ifood")),
        "price_99food": channel_price(base_price, lookup("food99")),
        "price_keeta": channel_price(base_price, keeta),
    }
