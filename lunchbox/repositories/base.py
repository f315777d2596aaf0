"""
Repository interface.
Services depend on this abstraction; the DuckDB implementation lives in duckdb_repository.
"""

import datetime as dt
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Dict, List, Optional

from ..models.holiday import Holiday
from ..models.kid import Kid
from ..models.menu import MonthlyMenuItem
from ..models.selection import LunchSelection, LunchSelectionDetail, SelectionHistory
from ..models.user import User


class LunchRepository(ABC):
    """Read/write access to users, kids, menu items, selections, history and holidays"""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Atomic unit of work; nested calls join the outer one"""

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, fields: Dict[str, Any], created_at: dt.datetime) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]: ...

    # Kids
    @abstractmethod
    def list_kids(self, user_id: int) -> List[Kid]: ...

    @abstractmethod
    def get_kid(self, kid_id: int) -> Optional[Kid]: ...

    @abstractmethod
    def create_kid(self, user_id: int, fields: Dict[str, Any]) -> Kid: ...

    @abstractmethod
    def update_kid(self, kid_id: int, fields: Dict[str, Any]) -> Optional[Kid]: ...

    @abstractmethod
    def delete_kid(self, kid_id: int) -> bool:
        """Delete a kid together with its selections and their history"""

    # Monthly menu
    @abstractmethod
    def get_menu_item(self, menu_item_id: int) -> Optional[MonthlyMenuItem]: ...

    @abstractmethod
    def list_menu_items(self, month: dt.date, available_only: bool = True) -> List[MonthlyMenuItem]: ...

    @abstractmethod
    def list_all_menu_items(self) -> List[MonthlyMenuItem]: ...

    @abstractmethod
    def create_menu_item(self, fields: Dict[str, Any]) -> MonthlyMenuItem: ...

    @abstractmethod
    def update_menu_item(self, menu_item_id: int, fields: Dict[str, Any]) -> Optional[MonthlyMenuItem]: ...

    # Lunch selections
    @abstractmethod
    def get_selection(self, selection_id: int) -> Optional[LunchSelection]: ...

    @abstractmethod
    def find_selection(self, kid_id: int, date: dt.date) -> Optional[LunchSelection]: ...

    @abstractmethod
    def list_selections(self, kid_id: int, start: dt.date, end: dt.date) -> List[LunchSelectionDetail]:
        """Selections of a kid with start <= date <= end, joined with their menu item"""

    @abstractmethod
    def create_selection(self, kid_id: int, menu_item_id: int, date: dt.date,
                         now: dt.datetime) -> LunchSelection: ...

    @abstractmethod
    def update_selection(self, selection_id: int, menu_item_id: int,
                         now: dt.datetime) -> Optional[LunchSelection]: ...

    @abstractmethod
    def delete_selection(self, selection_id: int) -> bool: ...

    # Selection history
    @abstractmethod
    def add_history(self, selection_id: int, old_menu_item_id: Optional[int],
                    new_menu_item_id: int, changed_by: int,
                    changed_at: dt.datetime) -> SelectionHistory: ...

    @abstractmethod
    def list_history(self, selection_id: int) -> List[SelectionHistory]: ...

    # Holidays
    @abstractmethod
    def list_holidays(self, start: dt.date, end: dt.date) -> List[Holiday]: ...

    @abstractmethod
    def get_holiday(self, holiday_id: int) -> Optional[Holiday]: ...

    @abstractmethod
    def get_holiday_by_date(self, date: dt.date) -> Optional[Holiday]: ...

    @abstractmethod
    def create_holiday(self, date: dt.date, description: str, created_at: dt.datetime) -> Holiday: ...

    @abstractmethod
    def delete_holiday(self, holiday_id: int) -> bool: ...
