"""
User profile routes
"""

from fastapi import APIRouter, Depends

from ...schemas.user import UserProfileResponse, UserUpdateRequest
from ...services import ServiceContainer
from ..deps import get_current_user_id, get_services

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
def get_my_profile(
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    user = services.auth.get_current_user(user_id)
    return UserProfileResponse.model_validate(user)


@router.put("/me", response_model=UserProfileResponse)
def update_my_profile(
    req: UserUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """Update the caller's profile; omitted fields stay as they are"""
    user = services.auth.update_profile(user_id, req.model_dump(exclude_unset=True))
    return UserProfileResponse.model_validate(user)
