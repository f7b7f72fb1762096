"""
Cart request/response schemas
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.cart import Cart


class AddToCartRequest(BaseModel):
    menu_item_id: int = Field(..., description="Menu item to add one unit of")


class SetQuantityRequest(BaseModel):
    quantity: int = Field(..., description="New quantity; zero or less removes the line")


class CartLineResponse(BaseModel):
    menu_item_id: int = Field(..., description="Menu item ID")
    name: str = Field(..., description="Name")
    emoji: Optional[str] = Field(None, description="Icon")
    unit_price: Decimal = Field(..., description="Price captured when first added")
    quantity: int = Field(..., description="Quantity")
    subtotal: Decimal = Field(..., description="quantity x unit_price")


class CartResponse(BaseModel):
    lines: List[CartLineResponse] = Field(default_factory=list, description="Cart lines")
    total: Decimal = Field(Decimal("0"), description="Sum of subtotals")
    item_count: int = Field(0, description="Units in the cart")

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartResponse":
        return cls(
            lines=[
                CartLineResponse(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    emoji=line.emoji,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in cart.lines()
            ],
            total=cart.total(),
            item_count=cart.item_count,
        )
