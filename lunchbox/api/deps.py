"""
FastAPI dependencies shared by the v1 routers
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import AuthenticationError
from ..services import ServiceContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    """Service container built by create_app()"""
    return request.app.state.services


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    services: ServiceContainer = Depends(get_services),
) -> int:
    """Resolve the acting user from the bearer token"""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    user_id = services.security.get_user_id_from_token(credentials.credentials)
    services.auth.get_current_user(user_id)
    return user_id
