"""
User and role models
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import BaseEntity, TimestampMixin


class Role(str, Enum):
    """Dashboard role"""
    ADMIN = "admin"
    STAFF = "staff"
    CUSTOMER = "customer"


class User(BaseEntity, TimestampMixin):
    """Account without the password hash"""
    id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email")
    full_name: Optional[str] = Field(None, description="Full name")


class UserRole(BaseEntity, TimestampMixin):
    """Role assignment, one per user"""
    user_id: int = Field(..., description="User ID")
    email: Optional[str] = Field(None, description="Email")
    role: Role = Field(..., description="Role")
    full_name: Optional[str] = Field(None, description="Full name")
    is_active: bool = Field(True, description="Account active")
