"""
Kid profile service
Every operation is scoped to the owning user; other users see "not found".
"""

import logging
from typing import Any, Dict, List

from ..core.exceptions import AuthorizationError
from ..models.kid import Kid
from ..repositories.base import LunchRepository

logger = logging.getLogger(__name__)


class KidService:

    def __init__(self, repository: LunchRepository):
        self.repository = repository

    def list_kids(self, user_id: int) -> List[Kid]:
        return self.repository.list_kids(user_id)

    def get_kid(self, user_id: int, kid_id: int) -> Kid:
        kid = self.repository.get_kid(kid_id)
        if kid is None or not kid.is_owned_by(user_id):
            raise AuthorizationError("Kid not found", details={"kid_id": kid_id})
        return kid

    def create_kid(self, user_id: int, fields: Dict[str, Any]) -> Kid:
        kid = self.repository.create_kid(user_id, fields)
        logger.info("kid %s created for user %s", kid.id, user_id)
        return kid

    def update_kid(self, user_id: int, kid_id: int, fields: Dict[str, Any]) -> Kid:
        with self.repository.transaction():
            self.get_kid(user_id, kid_id)
            return self.repository.update_kid(kid_id, fields)

    def delete_kid(self, user_id: int, kid_id: int):
        """Remove a kid along with its selections and their history"""
        with self.repository.transaction():
            self.get_kid(user_id, kid_id)
            self.repository.delete_kid(kid_id)
        logger.info("kid %s deleted by user %s", kid_id, user_id)
