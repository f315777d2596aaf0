"""
Account service
Registration, login and profile management
"""

import logging
from typing import Any, Dict, Optional

from ..core.clock import Clock
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from ..core.security import SecurityManager, hash_password, verify_password
from ..models.user import User
from ..repositories.base import LunchRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Account service"""

    def __init__(self, repository: LunchRepository, security: SecurityManager,
                 clock: Clock, admin_usernames: Optional[set] = None):
        self.repository = repository
        self.security = security
        self.clock = clock
        self.admin_usernames = admin_usernames or set()

    def register(self, fields: Dict[str, Any]) -> User:
        """
        Create an account.

        Args:
            fields: username, password (plain), name, email, optional gender/profile_picture

        Raises:
            ConflictError: username already taken
        """
        data = dict(fields)
        username = data["username"]
        data["password"] = hash_password(data["password"])
        data["is_admin"] = username in self.admin_usernames

        with self.repository.transaction():
            if self.repository.get_user_by_username(username) is not None:
                raise ConflictError("Username already exists", details={"field": "username"})
            user = self.repository.create_user(data, self.clock.now())

        logger.info("user %s registered (admin=%s)", user.id, user.is_admin)
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.repository.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.info("failed login for %s", username)
            raise AuthenticationError("Invalid username or password")
        return user

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Authenticate and issue an access token"""
        user = self.authenticate(username, password)
        return {
            "token": self.security.create_jwt_token(user.id),
            "user": user,
        }

    def get_current_user(self, user_id: int) -> User:
        user = self.repository.get_user(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return user

    def update_profile(self, user_id: int, fields: Dict[str, Any]) -> User:
        data = {k: v for k, v in fields.items() if v is not None}
        if "password" in data:
            data["password"] = hash_password(data["password"])

        user = self.repository.update_user(user_id, data)
        if user is None:
            raise AuthorizationError("User not found")
        return user
