"""Cart schemas - the pre-order staging area."""

from decimal import Decimal

from pydantic import Field

from foodly_schemas.common import Money, WireModel


class CartItem(WireModel):
    """
    One line in the cart.

    menu_item_id and restaurant_id are optional here because the server and
    menu pages can hand over incomplete lines; the cart store refuses to
    submit a line without them.
    """

    menu_item_id: int | None = Field(default=None, alias="menu_item_id")
    name: str = ""
    unit_price: Money = Field(default=Decimal("0.00"), alias="price")
    quantity: int = Field(default=1, alias="qty", gt=0)
    restaurant_id: int | None = Field(default=None, alias="restaurantId")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart(WireModel):
    """The customer's cart, mirrored from the server."""

    items: list[CartItem] = Field(default_factory=list)
    delivery_address: str = Field(default="", alias="address")

    @classmethod
    def empty(cls) -> "Cart":
        return cls(items=[], delivery_address="")

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0.00"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def restaurant_ids(self) -> set[int]:
        return {i.restaurant_id for i in self.items if i.restaurant_id is not None}

    def find(self, menu_item_id: int | None) -> CartItem | None:
        """Return the line for a menu item, if present."""
        for item in self.items:
            if item.menu_item_id == menu_item_id:
                return item
        return None
