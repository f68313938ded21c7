"""Tests for checkout pricing."""

from decimal import Decimal

from foodly_schemas import Cart, CartItem

from apps.web.ordering import pricing


class TestCouponDiscount:
    """Tests for the capped percentage discount."""

    def test_ten_percent(self) -> None:
        assert pricing.coupon_discount(Decimal("24.00")) == Decimal("2.40")

    def test_capped(self) -> None:
        assert pricing.coupon_discount(Decimal("900.00")) == Decimal("50.00")

    def test_never_exceeds_cap_or_share_of_subtotal(self) -> None:
        for raw in ["0.01", "3.33", "499.99", "500.00", "500.01", "12345.67"]:
            subtotal = Decimal(raw)
            discount = pricing.coupon_discount(subtotal)
            assert Decimal("0") <= discount <= Decimal("50.00")
            assert discount <= pricing.to_money(subtotal * Decimal("0.10"))

    def test_zero_subtotal(self) -> None:
        assert pricing.coupon_discount(Decimal("0")) == Decimal("0.00")

    def test_rounds_half_up_to_cents(self) -> None:
        assert pricing.coupon_discount(Decimal("0.05")) == Decimal("0.01")


class TestQuote:
    """Tests for checkout totals."""

    def test_with_coupon(self) -> None:
        quote = pricing.quote(Decimal("24.00"), coupon_applied=True)

        assert quote.subtotal == Decimal("24.00")
        assert quote.discount == Decimal("2.40")
        assert quote.delivery_fee == Decimal("5.00")
        assert quote.total == Decimal("26.60")

    def test_without_coupon(self) -> None:
        quote = pricing.quote(Decimal("24.00"))

        assert quote.discount == Decimal("0.00")
        assert quote.total == Decimal("29.00")

    def test_empty_cart_has_no_delivery_fee(self) -> None:
        quote = pricing.quote(Decimal("0"), coupon_applied=True)

        assert quote.total == Decimal("0.00")

    def test_quote_cart_ignores_blank_coupon(self, margherita_line: CartItem) -> None:
        cart = Cart(items=[margherita_line])

        assert pricing.quote_cart(cart, "   ").discount == Decimal("0.00")
        assert pricing.quote_cart(cart, "SAVE10").total == Decimal("26.60")

    def test_total_serializes_as_number(self) -> None:
        wire = pricing.quote(Decimal("24.00"), coupon_applied=True).to_wire()

        assert wire["total"] == 26.6
