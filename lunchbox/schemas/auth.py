"""
Authentication request/response schemas
"""

from pydantic import BaseModel, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Registration request"""
    username: str = Field(..., min_length=3, max_length=50, description="Login name")
    password: str = Field(..., min_length=6, max_length=128, description="Plain password")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Email")
    gender: Optional[str] = Field(None, max_length=20, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "parent1",
                "password": "secret123",
                "name": "Asha Rao",
                "email": "asha@example.com"
            }
        }
    }


class LoginRequest(BaseModel):
    """Login request"""
    username: str = Field(..., description="Login name")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Login response"""
    token: str = Field(description="JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    user_id: int = Field(description="User ID")
    is_admin: bool = Field(description="Admin flag")
