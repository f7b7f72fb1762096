"""
Menu item models
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .base import BaseEntity, TimestampMixin


class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    emoji: Optional[str] = Field("☕", max_length=16, description="Icon shown next to the name")
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Unit price")
    description: Optional[str] = Field(None, description="Description")
    image_url: Optional[str] = Field(None, description="Image URL")


class MenuItem(MenuItemBase, BaseEntity, TimestampMixin):
    """Persisted menu item"""
    id: int = Field(..., description="Menu item ID")
    is_active: bool = Field(True, description="Offered to customers")


class MenuItemCreate(MenuItemBase):
    """New menu item"""
    is_active: bool = Field(True, description="Offered to customers")


class MenuItemUpdate(BaseModel):
    """Partial update; omitted fields stay unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    emoji: Optional[str] = Field(None, max_length=16)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
