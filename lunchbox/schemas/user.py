"""
User profile schemas
"""

from pydantic import BaseModel, Field
from typing import Optional


class UserProfileResponse(BaseModel):
    """User profile (no password)"""
    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email")
    gender: Optional[str] = Field(None, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    is_admin: bool = Field(..., description="Admin flag")

    model_config = {"from_attributes": True}


class UserUpdateRequest(BaseModel):
    """Profile update; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Display name")
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Email")
    gender: Optional[str] = Field(None, max_length=20, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    password: Optional[str] = Field(None, min_length=6, max_length=128, description="New password")
