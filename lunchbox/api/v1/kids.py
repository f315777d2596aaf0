"""
Kid profile routes
Kids owned by another user are reported as 404.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...schemas.common import ErrorResponse
from ...schemas.kid import KidCreateRequest, KidResponse, KidUpdateRequest
from ...services import ServiceContainer
from ..deps import get_current_user_id, get_services

router = APIRouter()


@router.get("", response_model=List[KidResponse])
def list_kids(
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    return [KidResponse.model_validate(k) for k in services.kids.list_kids(user_id)]


@router.post("", response_model=KidResponse, status_code=status.HTTP_201_CREATED)
def create_kid(
    req: KidCreateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    kid = services.kids.create_kid(user_id, req.model_dump())
    return KidResponse.model_validate(kid)


@router.get("/{kid_id}", response_model=KidResponse, responses={404: {"model": ErrorResponse}})
def get_kid(
    kid_id: int,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    return KidResponse.model_validate(services.kids.get_kid(user_id, kid_id))


@router.put("/{kid_id}", response_model=KidResponse, responses={404: {"model": ErrorResponse}})
def update_kid(
    kid_id: int,
    req: KidUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    kid = services.kids.update_kid(user_id, kid_id, req.model_dump(exclude_unset=True))
    return KidResponse.model_validate(kid)


@router.delete(
    "/{kid_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_kid(
    kid_id: int,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """Delete a kid together with its lunch selections"""
    services.kids.delete_kid(user_id, kid_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
