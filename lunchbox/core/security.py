"""
Security helpers: JWT issuing/verification and password hashing.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# Password hashing context; scrypt cost n = 2**14
pwd_context = CryptContext(schemes=["scrypt"], deprecated="auto", scrypt__default_rounds=14)


def hash_password(password: str) -> str:
    """Salted scrypt hash in passlib's modular crypt format"""
    return pwd_context.hash(password)


def verify_password(supplied: str, stored: str) -> bool:
    try:
        return pwd_context.verify(supplied, stored)
    except ValueError as e:
        logger.warning("Stored password hash is unusable: %s", e)
        return False


class SecurityManager:
    """Issues and verifies access tokens"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_hours: int = 24 * 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_hours = expire_hours

    @classmethod
    def from_settings(cls, settings) -> "SecurityManager":
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.jwt_expire_hours)

    def create_jwt_token(self, user_id: int, additional_claims: Dict[str, Any] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(hours=self.expire_hours),
            "iat": now,
        }

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}")

    def get_user_id_from_token(self, token: str) -> int:
        payload = self.decode_jwt_token(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Token missing subject")
