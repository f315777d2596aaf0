"""
Admin catalog service
Monthly menu and holiday calendar maintenance, restricted to admins
"""

import logging
from datetime import date
from typing import Any, Dict, List

from ..core.clock import Clock
from ..core.exceptions import ConflictError, PermissionDeniedError, ResourceNotFoundError
from ..models.holiday import Holiday
from ..models.menu import MonthlyMenuItem
from ..repositories.base import LunchRepository

logger = logging.getLogger(__name__)


class AdminService:

    def __init__(self, repository: LunchRepository, clock: Clock):
        self.repository = repository
        self.clock = clock

    def require_admin(self, user_id: int):
        user = self.repository.get_user(user_id)
        if user is None or not user.is_admin:
            raise PermissionDeniedError("Admin access required")

    def list_all_menu_items(self, user_id: int) -> List[MonthlyMenuItem]:
        self.require_admin(user_id)
        return self.repository.list_all_menu_items()

    def create_menu_item(self, user_id: int, fields: Dict[str, Any]) -> MonthlyMenuItem:
        self.require_admin(user_id)
        item = self.repository.create_menu_item(fields)
        logger.info("menu item %s created for %s by admin %s", item.id, item.month, user_id)
        return item

    def update_menu_item(self, user_id: int, menu_item_id: int,
                         fields: Dict[str, Any]) -> MonthlyMenuItem:
        """Partial update; unset fields keep their value"""
        self.require_admin(user_id)
        with self.repository.transaction():
            if self.repository.get_menu_item(menu_item_id) is None:
                raise ResourceNotFoundError("Menu item not found", details={"menu_item_id": menu_item_id})
            item = self.repository.update_menu_item(menu_item_id, fields)
        logger.info("menu item %s updated by admin %s", menu_item_id, user_id)
        return item

    def create_holiday(self, user_id: int, day: date, description: str) -> Holiday:
        self.require_admin(user_id)
        with self.repository.transaction():
            if self.repository.get_holiday_by_date(day) is not None:
                raise ConflictError(
                    f"{day.isoformat()} is already a holiday", details={"field": "date"}
                )
            holiday = self.repository.create_holiday(day, description, self.clock.now())
        logger.info("holiday %s added by admin %s", day, user_id)
        return holiday

    def delete_holiday(self, user_id: int, holiday_id: int):
        self.require_admin(user_id)
        if not self.repository.delete_holiday(holiday_id):
            raise ResourceNotFoundError("Holiday not found", details={"holiday_id": holiday_id})
