"""
User request/response schemas
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.user import Role, UserRole


class RoleResponse(BaseModel):
    user_id: int = Field(..., description="User ID")
    role: Optional[Role] = Field(None, description="Role, null when unassigned")


class SetRoleRequest(BaseModel):
    role: Role = Field(..., description="New role")
    full_name: Optional[str] = Field(None, max_length=100, description="Full name")


class StaffListResponse(BaseModel):
    items: List[UserRole] = Field(..., description="Staff members, newest first")
    total: int = Field(..., description="Number of staff")
    active: int = Field(..., description="Number of active staff")
