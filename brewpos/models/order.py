"""
Order (transaction) models
"""

from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import BaseEntity, TimestampMixin


class PaymentMethod(str, Enum):
    """How the order was paid"""
    CASH = "cash"
    E_WALLET = "e-wallet"

    @classmethod
    def from_display_name(cls, name: str) -> "PaymentMethod":
        """Map a display name such as "E-Wallet" to its member"""
        return cls(name.strip().lower())


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class OrderLine(BaseEntity):
    """One purchased item, price frozen at sale time"""
    id: int = Field(..., description="Line ID")
    transaction_id: int = Field(..., description="Order ID")
    menu_item_id: int = Field(..., description="Menu item ID")
    quantity: int = Field(..., gt=0, description="Quantity")
    price_per_unit: Decimal = Field(..., description="Unit price at sale time")
    subtotal: Decimal = Field(..., description="quantity x price_per_unit")


class Order(BaseEntity, TimestampMixin):
    """Completed purchase"""
    id: int = Field(..., description="Order ID")
    user_id: Optional[int] = Field(None, description="Owning user")
    transaction_date: date = Field(..., description="Order date")
    transaction_time: time = Field(..., description="Order time")
    total_amount: Decimal = Field(..., description="Sum of line subtotals")
    payment_method: PaymentMethod = Field(..., description="Payment method")
    status: OrderStatus = Field(..., description="Status")
    client_token: Optional[str] = Field(None, description="Idempotency token")
    items: List[OrderLine] = Field(default_factory=list, description="Order lines")
