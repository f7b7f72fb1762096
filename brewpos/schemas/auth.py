"""
Auth request/response schemas
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..models.user import Role


class SignUpRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Password")
    full_name: str = Field("", max_length=100, description="Full name")
    role: Role = Field(Role.CUSTOMER, description="customer or staff; admin only for the bootstrap address")

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "barista@example.com",
                "password": "s3cret!",
                "full_name": "Juan Dela Cruz",
                "role": "staff"
            }
        }
    }


class SignInRequest(BaseModel):
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class IdentityResponse(BaseModel):
    """Who is signed in"""
    user_id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email")
    full_name: Optional[str] = Field(None, description="Full name")
    role: Role = Field(..., description="Active role")
    session_id: str = Field(..., description="Session ID")


class AuthResponse(BaseModel):
    token: str = Field(..., description="JWT bearer token")
    token_type: str = Field("Bearer", description="Token type")
    expires_in: int = Field(..., description="Lifetime in seconds")
    identity: IdentityResponse = Field(..., description="Signed-in identity")
