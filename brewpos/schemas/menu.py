"""
Menu request/response schemas
"""

from typing import List

from pydantic import BaseModel, Field

from ..models.menu import MenuItem, MenuItemCreate, MenuItemUpdate

MenuItemCreateRequest = MenuItemCreate
MenuItemUpdateRequest = MenuItemUpdate


class MenuListResponse(BaseModel):
    items: List[MenuItem] = Field(..., description="Menu items")
    total: int = Field(..., description="Number of items")
