"""
Lunch selection data models
"""

from pydantic import BaseModel, Field
import datetime as dt
from enum import Enum
from typing import Optional
from .base import BaseEntity, TimestampMixin
from .menu import MonthlyMenuItem


class SelectionOutcome(str, Enum):
    """Result of a single create/update/delete request"""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"   # same item submitted again
    DELETED = "deleted"
    LOCKED = "locked"         # inside the lock window or missing
    INVALID = "invalid"       # date not selectable or bad menu item


class LunchSelection(BaseEntity, TimestampMixin):
    """One kid, one menu item, one delivery date"""
    id: int = Field(..., description="Selection ID")
    kid_id: int = Field(..., description="Kid ID")
    menu_item_id: int = Field(..., description="Chosen menu item ID")
    date: dt.date = Field(..., description="Delivery date")


class LunchSelectionDetail(LunchSelection):
    """Selection joined with its menu item"""
    menu_item: MonthlyMenuItem
    locked: bool = Field(False, description="Whether the selection can no longer change")


class SelectionHistory(BaseEntity):
    """Append-only audit row for an update"""
    id: int = Field(..., description="History ID")
    selection_id: int = Field(..., description="Selection ID")
    old_menu_item_id: Optional[int] = Field(None, description="Previous menu item")
    new_menu_item_id: int = Field(..., description="New menu item")
    changed_at: dt.datetime = Field(..., description="Change time")
    changed_by: int = Field(..., description="Acting user ID")


class SelectionResult(BaseModel):
    """Outcome of a lifecycle operation"""
    outcome: SelectionOutcome
    selection: Optional[LunchSelection] = None
    history: Optional[SelectionHistory] = None


class BulkSelectionItem(BaseModel):
    """Per-date outcome of a bulk submission"""
    date: dt.date
    outcome: SelectionOutcome
    selection: Optional[LunchSelection] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
