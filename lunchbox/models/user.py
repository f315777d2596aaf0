"""
User data models
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from .base import BaseEntity


class User(BaseEntity):
    """Parent (or admin) account"""
    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Unique login name")
    password: str = Field(..., repr=False, description="Salted password hash")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")
    gender: Optional[str] = Field(None, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    is_admin: bool = Field(False, description="Admin flag")
    created_at: Optional[datetime] = None
