"""
Menu query service
"""

from datetime import date
from typing import List, Optional, Tuple

from ..core.exceptions import ValidationError
from ..models.menu import MonthlyMenuItem
from ..repositories.base import LunchRepository
from .eligibility import month_bounds


def split_by_diet(items: List[MonthlyMenuItem]) -> Tuple[List[MonthlyMenuItem], List[MonthlyMenuItem]]:
    """Partition items into (vegetarian, non_vegetarian)"""
    vegetarian = [item for item in items if item.is_vegetarian]
    non_vegetarian = [item for item in items if not item.is_vegetarian]
    return vegetarian, non_vegetarian


class MenuService:
    """Read access to the monthly menu"""

    def __init__(self, repository: LunchRepository):
        self.repository = repository

    def get_menu_items(self, year: int, month: int,
                       vegetarian: Optional[bool] = None) -> List[MonthlyMenuItem]:
        """Available items of a month; an empty list means nothing is published yet"""
        first, _ = month_bounds(year, month)
        items = self.repository.list_menu_items(first, available_only=True)
        if vegetarian is None:
            return items
        veg, non_veg = split_by_diet(items)
        return veg if vegetarian else non_veg

    def get_available_item(self, menu_item_id: int, day: date) -> MonthlyMenuItem:
        """
        Resolve a menu item for a delivery date.

        Raises:
            ValidationError: item missing, unavailable, or published for another month
        """
        item = self.repository.get_menu_item(menu_item_id)
        if item is None:
            raise ValidationError(f"Menu item {menu_item_id} does not exist", field="menu_item_id")
        if not item.is_available:
            raise ValidationError(f"Menu item {menu_item_id} is not available", field="menu_item_id")
        if not item.belongs_to(day.year, day.month):
            raise ValidationError(
                f"Menu item {menu_item_id} is not on the menu for {day:%Y-%m}",
                field="menu_item_id",
            )
        return item
