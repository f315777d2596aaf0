"""
Base data models.
"""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TimestampMixin(BaseModel):
    """Creation/modification timestamps"""
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class BaseEntity(BaseModel):
    """Base for records loaded from the database"""

    model_config = {"from_attributes": True}
