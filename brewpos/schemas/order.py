"""
Order request/response schemas
"""

from datetime import date, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.order import Order, OrderStatus, PaymentMethod


class CheckoutRequest(BaseModel):
    payment_method: str = Field("cash", description="cash or e-wallet (display names accepted)")
    client_token: Optional[str] = Field(
        None, min_length=8, max_length=128,
        description="Idempotency token; resubmitting it returns the original order"
    )


class CheckoutResponse(BaseModel):
    transaction_id: int = Field(..., description="Order ID")
    total_amount: Decimal = Field(..., description="Order total")
    payment_method: PaymentMethod = Field(..., description="Payment method")
    status: OrderStatus = Field(..., description="Order status")
    transaction_date: date = Field(..., description="Order date")
    transaction_time: time = Field(..., description="Order time")
    item_count: int = Field(..., description="Units purchased")
    replayed: bool = Field(False, description="True when returned for a repeated client token")
    message: str = Field(..., description="Confirmation message")


class OrderListResponse(BaseModel):
    items: List[Order] = Field(..., description="Orders, newest first")
    total: int = Field(..., description="Total number of orders")
    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Offset")
