"""
Selection audit trail.
Append-only; rows are written only by the update transition, inside its transaction.
"""

import logging
from typing import List, Optional

from ..core.clock import Clock
from ..models.selection import SelectionHistory
from ..repositories.base import LunchRepository

logger = logging.getLogger(__name__)


class AuditTrail:

    def __init__(self, repository: LunchRepository, clock: Clock):
        self.repository = repository
        self.clock = clock

    def record(self, selection_id: int, old_menu_item_id: Optional[int],
               new_menu_item_id: int, acting_user_id: int) -> SelectionHistory:
        entry = self.repository.add_history(
            selection_id, old_menu_item_id, new_menu_item_id,
            acting_user_id, self.clock.now(),
        )
        logger.debug(
            "selection %s changed %s -> %s by user %s",
            selection_id, old_menu_item_id, new_menu_item_id, acting_user_id,
        )
        return entry

    def history_for(self, selection_id: int) -> List[SelectionHistory]:
        return self.repository.list_history(selection_id)
