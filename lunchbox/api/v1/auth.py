"""
Authentication routes
"""

from fastapi import APIRouter, Depends, status

from ...schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from ...schemas.common import ErrorResponse
from ...schemas.user import UserProfileResponse
from ...services import ServiceContainer
from ..deps import get_services

router = APIRouter()


@router.post(
    "/register",
    response_model=UserProfileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
def register(req: RegisterRequest, services: ServiceContainer = Depends(get_services)):
    """Create a parent account"""
    user = services.auth.register(req.model_dump())
    return UserProfileResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse, responses={401: {"model": ErrorResponse}})
def login(req: LoginRequest, services: ServiceContainer = Depends(get_services)):
    """
    Exchange username/password for a JWT access token.
    The token goes into the Authorization header as ``Bearer <token>``.
    """
    result = services.auth.login(req.username, req.password)
    user = result["user"]
    return LoginResponse(token=result["token"], user_id=user.id, is_admin=user.is_admin)
