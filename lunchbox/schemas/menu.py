"""
Menu, holiday and eligibility schemas
"""

import datetime as dt
from pydantic import BaseModel, Field
from typing import List, Optional


class MenuItemResponse(BaseModel):
    """Monthly menu item"""
    id: int = Field(..., description="Menu item ID")
    name: str = Field(..., description="Dish name")
    description: str = Field(..., description="Description")
    is_vegetarian: bool = Field(..., description="Vegetarian flag")
    price: int = Field(..., description="Price in minor currency units")
    month: dt.date = Field(..., description="First day of the menu month")
    image_url: str = Field(..., description="Image URL")
    is_available: bool = Field(..., description="Orderable flag")

    model_config = {"from_attributes": True}


class MenuItemCreateRequest(BaseModel):
    """Menu item creation (admin)"""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    is_vegetarian: bool = Field(...)
    price: int = Field(..., ge=0, description="Price in minor currency units")
    month: dt.date = Field(..., description="Any day of the menu month")
    image_url: str = Field(...)
    is_available: bool = Field(True)


class MenuItemUpdateRequest(BaseModel):
    """Menu item partial update (admin)"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    is_vegetarian: Optional[bool] = None
    price: Optional[int] = Field(None, ge=0)
    month: Optional[dt.date] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None


class HolidayResponse(BaseModel):
    """Holiday"""
    id: int
    date: dt.date
    description: str

    model_config = {"from_attributes": True}


class HolidayCreateRequest(BaseModel):
    """Holiday creation (admin)"""
    date: dt.date = Field(..., description="Holiday date")
    description: str = Field(..., min_length=1, max_length=200)


class EligibilityResponse(BaseModel):
    """Selectable dates of a month"""
    year: int
    month: int
    dates: List[dt.date] = Field(..., description="Dates open for selection, ascending")
