"""
Admin routes: monthly menu catalog and holiday calendar
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...schemas.common import ErrorResponse
from ...schemas.menu import (
    HolidayCreateRequest,
    HolidayResponse,
    MenuItemCreateRequest,
    MenuItemResponse,
    MenuItemUpdateRequest,
)
from ...services import ServiceContainer
from ..deps import get_current_user_id, get_services

router = APIRouter(responses={403: {"model": ErrorResponse}})


@router.get("/check")
def check_admin(
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    services.admin.require_admin(user_id)
    return {"is_admin": True}


@router.get("/menu-items", response_model=List[MenuItemResponse])
def list_menu_items(
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """All menu items of every month, including unavailable ones"""
    items = services.admin.list_all_menu_items(user_id)
    return [MenuItemResponse.model_validate(i) for i in items]


@router.post("/menu-items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    req: MenuItemCreateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    item = services.admin.create_menu_item(user_id, req.model_dump())
    return MenuItemResponse.model_validate(item)


@router.put(
    "/menu-items/{menu_item_id}",
    response_model=MenuItemResponse,
    responses={404: {"model": ErrorResponse}},
)
def update_menu_item(
    menu_item_id: int,
    req: MenuItemUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    item = services.admin.update_menu_item(user_id, menu_item_id, req.model_dump(exclude_unset=True))
    return MenuItemResponse.model_validate(item)


@router.post(
    "/holidays",
    response_model=HolidayResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
def create_holiday(
    req: HolidayCreateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    holiday = services.admin.create_holiday(user_id, req.date, req.description)
    return HolidayResponse.model_validate(holiday)


@router.delete(
    "/holidays/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_holiday(
    holiday_id: int,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    services.admin.delete_holiday(user_id, holiday_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
