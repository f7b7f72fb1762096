"""
Statistics response schemas
"""

from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from ..models.order import Order


class DashboardResponse(BaseModel):
    stat_date: date = Field(..., description="Day")
    total_revenue: Decimal = Field(..., description="Revenue today")
    total_orders: int = Field(..., description="Orders today")
    total_customers: int = Field(..., description="Customers today")
    total_smiles: int = Field(..., description="Smiles today")
    staff_count: int = Field(..., description="Active staff")
    menu_item_count: int = Field(..., description="Menu items")
    recent_orders: List[Order] = Field(default_factory=list, description="Latest orders")
