"""
Kid profile schemas
"""

from pydantic import BaseModel, Field
from typing import Optional


class KidCreateRequest(BaseModel):
    """Kid creation request"""
    name: str = Field(..., min_length=1, max_length=100, description="Name")
    grade: str = Field(..., min_length=1, max_length=20, description="Grade")
    school: str = Field(..., min_length=1, max_length=200, description="School")
    roll_number: str = Field(..., min_length=1, max_length=50, description="Roll number")
    gender: Optional[str] = Field(None, max_length=20, description="Gender")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")


class KidUpdateRequest(BaseModel):
    """Kid update; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    grade: Optional[str] = Field(None, min_length=1, max_length=20)
    school: Optional[str] = Field(None, min_length=1, max_length=200)
    roll_number: Optional[str] = Field(None, min_length=1, max_length=50)
    gender: Optional[str] = Field(None, max_length=20)
    profile_picture: Optional[str] = None


class KidResponse(BaseModel):
    """Kid profile"""
    id: int
    name: str
    grade: str
    school: str
    roll_number: str
    gender: Optional[str] = None
    profile_picture: Optional[str] = None
    user_id: int

    model_config = {"from_attributes": True}
