"""
Daily statistics model
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .base import BaseEntity


class DailyStatistic(BaseEntity):
    """Running totals for one calendar day"""
    stat_date: date = Field(..., description="Calendar day")
    total_revenue: Decimal = Field(Decimal("0"), description="Revenue")
    total_orders: int = Field(0, description="Completed orders")
    total_customers: int = Field(0, description="Customers served")
    total_smiles: int = Field(0, description="Smiles")
    updated_at: Optional[datetime] = Field(None, description="Last update")
    exists: bool = Field(True, description="False for a zeroed placeholder")
