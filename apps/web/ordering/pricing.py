"""Checkout pricing - coupon discount and delivery fee."""

from decimal import ROUND_HALF_UP, Decimal

from foodly_schemas import Cart, PriceQuote

from apps.web.config import settings

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def coupon_discount(subtotal: Decimal) -> Decimal:
    """Flat percentage of the subtotal, capped."""
    if subtotal <= 0:
        return ZERO
    discount = subtotal * settings.COUPON_DISCOUNT_RATE
    return to_money(min(discount, settings.COUPON_DISCOUNT_CAP))


def delivery_fee(subtotal: Decimal) -> Decimal:
    return to_money(settings.DELIVERY_FEE) if subtotal > 0 else ZERO


def quote(subtotal: Decimal, coupon_applied: bool = False) -> PriceQuote:
    """
    Compute checkout totals.

    Example:
        quote(Decimal("24.00"), coupon_applied=True)
        # subtotal=24.00 discount=2.40 delivery_fee=5.00 total=26.60
    """
    subtotal = to_money(subtotal)
    discount = coupon_discount(subtotal) if coupon_applied else ZERO
    fee = delivery_fee(subtotal)
    return PriceQuote(
        subtotal=subtotal,
        discount=discount,
        delivery_fee=fee,
        total=to_money(subtotal - discount + fee),
    )


def quote_cart(cart: Cart, coupon_code: str | None = None) -> PriceQuote:
    return quote(cart.subtotal, coupon_applied=bool(coupon_code and coupon_code.strip()))
