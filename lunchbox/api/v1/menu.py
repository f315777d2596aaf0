"""
Menu calendar routes: monthly menu, holidays and selectable dates
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from ...schemas.menu import EligibilityResponse, HolidayResponse, MenuItemResponse
from ...services import ServiceContainer
from ..deps import get_services

router = APIRouter()


@router.get("/menu/{year}/{month}", response_model=List[MenuItemResponse])
def get_menu(
    year: int,
    month: int = Path(..., ge=1, le=12),
    vegetarian: Optional[bool] = Query(None, description="Only vegetarian (true) or non-vegetarian (false) items"),
    services: ServiceContainer = Depends(get_services),
):
    """Available menu items of a month"""
    items = services.menu.get_menu_items(year, month, vegetarian=vegetarian)
    return [MenuItemResponse.model_validate(i) for i in items]


@router.get("/holidays/{year}/{month}", response_model=List[HolidayResponse])
def get_holidays(
    year: int,
    month: int = Path(..., ge=1, le=12),
    services: ServiceContainer = Depends(get_services),
):
    holidays = services.eligibility.holidays_for_month(year, month)
    return [HolidayResponse.model_validate(h) for h in holidays]


@router.get("/eligibility/{year}/{month}", response_model=EligibilityResponse)
def get_eligible_dates(
    year: int,
    month: int = Path(..., ge=1, le=12),
    services: ServiceContainer = Depends(get_services),
):
    """Dates of the month still open for selection, as of now"""
    return EligibilityResponse(
        year=year,
        month=month,
        dates=services.eligibility.selectable_dates(year, month),
    )
