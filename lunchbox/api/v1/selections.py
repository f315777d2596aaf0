"""
Lunch selection routes

Status codes:
- 201 new selection, 200 when an existing date was updated or left unchanged
- 404 kid missing or not owned by the caller
- 409 SELECTION_LOCKED when the selection is inside the lock window or gone
- 400 VALIDATION_ERROR for unselectable dates or unusable menu items
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from ...models.selection import SelectionOutcome
from ...schemas.common import ErrorResponse
from ...schemas.selection import (
    BulkSelectionItemResponse,
    BulkSelectionRequest,
    BulkSelectionResponse,
    SelectionCreateRequest,
    SelectionDetailResponse,
    SelectionMutationResponse,
    SelectionResponse,
    SelectionUpdateRequest,
)
from ...services import ServiceContainer
from ..deps import get_current_user_id, get_services

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get(
    "/{kid_id}/lunch-selections/{year}/{month}",
    response_model=List[SelectionDetailResponse],
    responses={404: {"model": ErrorResponse}},
)
def list_selections(
    kid_id: int,
    year: int,
    month: int = Path(..., ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """Selections of a kid in a month, joined with the chosen menu item"""
    selections = services.selections.list_for_month(user_id, kid_id, year, month)
    return [SelectionDetailResponse.model_validate(s) for s in selections]


@router.post(
    "/{kid_id}/lunch-selections",
    response_model=SelectionMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_selection(
    kid_id: int,
    req: SelectionCreateRequest,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """Pick a menu item for a date; an existing pick for that date is updated"""
    result = services.selections.create_selection(user_id, kid_id, req.date, req.menu_item_id)
    if result.outcome != SelectionOutcome.CREATED:
        response.status_code = status.HTTP_200_OK
    return SelectionMutationResponse(
        outcome=result.outcome,
        selection=SelectionResponse.model_validate(result.selection),
    )


@router.post(
    "/{kid_id}/lunch-selections/bulk",
    response_model=BulkSelectionResponse,
    responses={404: {"model": ErrorResponse}},
)
def bulk_select(
    kid_id: int,
    req: BulkSelectionRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    """Apply one menu item to several dates; each date succeeds or fails on its own"""
    results = services.selections.bulk_select(user_id, kid_id, req.dates, req.menu_item_id)
    failed = sum(1 for r in results if r.outcome in (SelectionOutcome.LOCKED, SelectionOutcome.INVALID))
    return BulkSelectionResponse(
        results=[BulkSelectionItemResponse.model_validate(r) for r in results],
        succeeded=len(results) - failed,
        failed=failed,
    )


@router.put(
    "/{kid_id}/lunch-selections/{selection_id}",
    response_model=SelectionMutationResponse,
    responses=ERROR_RESPONSES,
)
def update_selection(
    kid_id: int,
    selection_id: int,
    req: SelectionUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    result = services.selections.update_selection(user_id, kid_id, selection_id, req.menu_item_id)
    return SelectionMutationResponse(
        outcome=result.outcome,
        selection=SelectionResponse.model_validate(result.selection),
    )


@router.delete(
    "/{kid_id}/lunch-selections/{selection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def delete_selection(
    kid_id: int,
    selection_id: int,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_services),
):
    services.selections.delete_selection(user_id, kid_id, selection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
