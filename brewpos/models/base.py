"""
Base data models
Shared model base classes and common fields
"""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TimestampMixin(BaseModel):
    """Creation / update timestamps"""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BaseEntity(BaseModel):
    """Base for models built from database rows"""

    model_config = {"from_attributes": True, "use_enum_values": False}

