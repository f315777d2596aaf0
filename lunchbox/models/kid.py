"""
Kid (child profile) data models
"""

from pydantic import Field
from typing import Optional
from .base import BaseEntity


class Kid(BaseEntity):
    """Child profile owned by exactly one user"""
    id: int = Field(..., description="Kid ID")
    name: str = Field(..., description="Name")
    grade: str = Field(..., description="Grade / class")
    school: str = Field(..., description="School")
    roll_number: str = Field(..., description="Roll number")
    gender: Optional[str] = Field(None, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    user_id: int = Field(..., description="Owning user ID")

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id
