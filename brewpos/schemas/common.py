from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    success: bool = Field(True, description="Whether the request succeeded")
    message: str = Field(..., description="Human readable message")
    data: Optional[Dict[str, Any]] = Field(None, description="Extra data")


class ErrorResponse(BaseModel):
    """Error body written by the exception handlers"""
    success: bool = Field(False, description="Always false")
    error_code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Error details")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error_code": "CART_EMPTY",
                "message": "Cart is empty",
                "details": {}
            }
        }
    }
