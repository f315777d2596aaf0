"""
Lunch selection request/response schemas
"""

import datetime as dt
from pydantic import BaseModel, Field
from typing import List, Optional

from ..models.selection import SelectionOutcome
from .menu import MenuItemResponse


class SelectionCreateRequest(BaseModel):
    """Select an item for one date"""
    date: dt.date = Field(..., description="Delivery date (YYYY-MM-DD)")
    menu_item_id: int = Field(..., gt=0, description="Menu item ID")


class SelectionUpdateRequest(BaseModel):
    """Change the item of an existing selection"""
    menu_item_id: int = Field(..., gt=0, description="Menu item ID")


class BulkSelectionRequest(BaseModel):
    """Apply one item to several dates"""
    dates: List[dt.date] = Field(..., min_length=1, max_length=31, description="Delivery dates")
    menu_item_id: int = Field(..., gt=0, description="Menu item ID")


class SelectionResponse(BaseModel):
    """Lunch selection"""
    id: int
    kid_id: int
    menu_item_id: int
    date: dt.date
    created_at: Optional[dt.datetime] = None
    modified_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class SelectionDetailResponse(SelectionResponse):
    """Selection joined with its menu item"""
    menu_item: MenuItemResponse
    locked: bool = Field(..., description="True once the date is inside the lock window")


class SelectionMutationResponse(BaseModel):
    """Result of a create or update"""
    outcome: SelectionOutcome
    selection: SelectionResponse


class BulkSelectionItemResponse(BaseModel):
    """Per-date outcome"""
    date: dt.date
    outcome: SelectionOutcome
    selection: Optional[SelectionResponse] = None
    error_code: Optional[str] = None
    message: Optional[str] = None

    model_config = {"from_attributes": True}


class BulkSelectionResponse(BaseModel):
    """Outcome of a bulk submission"""
    results: List[BulkSelectionItemResponse]
    succeeded: int = Field(..., description="Dates created, updated or unchanged")
    failed: int = Field(..., description="Dates locked or invalid")
