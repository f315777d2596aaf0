"""
Holiday data model
"""

from pydantic import Field
import datetime as dt
from typing import Optional
from .base import BaseEntity


class Holiday(BaseEntity):
    """Date on which no lunch is served"""
    id: int = Field(..., description="Holiday ID")
    date: dt.date = Field(..., description="Holiday date")
    description: str = Field(..., description="Description")
    created_at: Optional[dt.datetime] = None
