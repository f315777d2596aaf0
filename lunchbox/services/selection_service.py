"""
Lunch selection service
Create, update and delete the per-kid per-date meal choices.

States of a (kid, date) pair:
- unselected: no row
- selected:   row exists and date >= tomorrow, may change
- locked:     row exists and date < tomorrow, immutable

Business rules:
- at most one selection per kid and date; creating over an existing one updates it
- only the kid's owner may read or change its selections; others get "not found"
- every effective update appends exactly one history row in the same transaction
- every operation re-reads the row and re-evaluates the lock inside its transaction
"""

import logging
from datetime import date
from typing import Iterable, List

from ..core.clock import Clock
from ..core.exceptions import AuthorizationError, LockedSelectionError, ValidationError
from ..models.kid import Kid
from ..models.selection import (
    BulkSelectionItem,
    LunchSelection,
    LunchSelectionDetail,
    SelectionOutcome,
    SelectionResult,
)
from ..repositories.base import LunchRepository
from .audit_service import AuditTrail
from .eligibility import EligibilityService, is_locked, month_bounds
from .menu_service import MenuService

logger = logging.getLogger(__name__)


class SelectionService:
    """Lifecycle manager for lunch selections"""

    def __init__(self, repository: LunchRepository, eligibility: EligibilityService,
                 menu: MenuService, audit: AuditTrail, clock: Clock):
        self.repository = repository
        self.eligibility = eligibility
        self.menu = menu
        self.audit = audit
        self.clock = clock

    def list_for_month(self, user_id: int, kid_id: int, year: int, month: int) -> List[LunchSelectionDetail]:
        """Selections of a kid within a month, each flagged with its lock state"""
        self._require_owned_kid(user_id, kid_id)
        first, last = month_bounds(year, month)
        today = self.clock.today()

        selections = self.repository.list_selections(kid_id, first, last)
        for selection in selections:
            selection.locked = is_locked(selection.date, today)
        return selections

    def create_selection(self, user_id: int, kid_id: int, day: date,
                         menu_item_id: int) -> SelectionResult:
        """
        Select a menu item for a kid on a date.

        An existing selection for the same date is updated instead of duplicated.

        Args:
            user_id: acting user
            kid_id: kid the lunch is for
            day: delivery date
            menu_item_id: chosen item, must be available in the date's month

        Returns:
            SelectionResult: outcome created, updated or unchanged

        Raises:
            AuthorizationError: kid missing or owned by someone else
            LockedSelectionError: a selection exists for the date and is locked
            ValidationError: date not selectable or menu item unusable
        """
        with self.repository.transaction():
            self._require_owned_kid(user_id, kid_id)

            existing = self.repository.find_selection(kid_id, day)
            if existing is not None:
                return self._update_existing(existing, menu_item_id, user_id)

            self._require_selectable(day)
            item = self.menu.get_available_item(menu_item_id, day)

            selection = self.repository.create_selection(kid_id, item.id, day, self.clock.now())

        logger.info(
            "selection %s created for kid %s on %s (item %s)",
            selection.id, kid_id, day, item.id,
            extra={"user_id": user_id, "kid_id": kid_id, "selection_id": selection.id},
        )
        return SelectionResult(outcome=SelectionOutcome.CREATED, selection=selection)

    def update_selection(self, user_id: int, kid_id: int, selection_id: int,
                         menu_item_id: int) -> SelectionResult:
        """
        Replace the menu item of an existing selection.

        Raises:
            AuthorizationError: kid missing or owned by someone else
            LockedSelectionError: selection locked, missing, or not the kid's
            ValidationError: menu item unusable or date no longer selectable
        """
        with self.repository.transaction():
            self._require_owned_kid(user_id, kid_id)
            selection = self._get_kid_selection(kid_id, selection_id)
            return self._update_existing(selection, menu_item_id, user_id)

    def delete_selection(self, user_id: int, kid_id: int, selection_id: int) -> SelectionResult:
        """
        Clear a selection before its lock window.

        Raises:
            AuthorizationError: kid missing or owned by someone else
            LockedSelectionError: selection locked, missing, or not the kid's
        """
        with self.repository.transaction():
            self._require_owned_kid(user_id, kid_id)
            selection = self._get_kid_selection(kid_id, selection_id)
            self._require_unlocked(selection)
            self.repository.delete_selection(selection.id)

        logger.info(
            "selection %s deleted for kid %s on %s", selection.id, kid_id, selection.date,
            extra={"user_id": user_id, "kid_id": kid_id, "selection_id": selection.id},
        )
        return SelectionResult(outcome=SelectionOutcome.DELETED, selection=selection)

    def bulk_select(self, user_id: int, kid_id: int, days: Iterable[date],
                    menu_item_id: int) -> List[BulkSelectionItem]:
        """
        Apply one menu item to several dates.

        Dates are processed one after another, each in its own transaction, so a
        date that became locked or invalid does not prevent the others.
        Duplicate dates are processed once, in first-seen order.

        Raises:
            AuthorizationError: kid missing or owned by someone else
        """
        self._require_owned_kid(user_id, kid_id)

        results = []
        seen = set()
        for day in days:
            if day in seen:
                continue
            seen.add(day)
            try:
                result = self.create_selection(user_id, kid_id, day, menu_item_id)
            except LockedSelectionError as e:
                results.append(BulkSelectionItem(
                    date=day, outcome=SelectionOutcome.LOCKED,
                    error_code=e.error_code, message=e.message,
                ))
            except ValidationError as e:
                results.append(BulkSelectionItem(
                    date=day, outcome=SelectionOutcome.INVALID,
                    error_code=e.error_code, message=e.message,
                ))
            else:
                results.append(BulkSelectionItem(
                    date=day, outcome=result.outcome, selection=result.selection,
                ))
        return results

    def _update_existing(self, selection: LunchSelection, menu_item_id: int,
                         user_id: int) -> SelectionResult:
        self._require_unlocked(selection)
        self._require_selectable(selection.date)
        item = self.menu.get_available_item(menu_item_id, selection.date)

        if item.id == selection.menu_item_id:
            return SelectionResult(outcome=SelectionOutcome.UNCHANGED, selection=selection)

        return self._update_and_audit(selection, item.id, user_id)

    def _update_and_audit(self, selection: LunchSelection, new_menu_item_id: int,
                          user_id: int) -> SelectionResult:
        """Row update and its history entry, committed together or not at all"""
        with self.repository.transaction():
            updated = self.repository.update_selection(selection.id, new_menu_item_id, self.clock.now())
            history = self.audit.record(selection.id, selection.menu_item_id, new_menu_item_id, user_id)

        logger.info(
            "selection %s updated: item %s -> %s", selection.id,
            selection.menu_item_id, new_menu_item_id,
            extra={"user_id": user_id, "kid_id": selection.kid_id, "selection_id": selection.id},
        )
        return SelectionResult(outcome=SelectionOutcome.UPDATED, selection=updated, history=history)

    def _require_owned_kid(self, user_id: int, kid_id: int) -> Kid:
        kid = self.repository.get_kid(kid_id)
        if kid is None or not kid.is_owned_by(user_id):
            raise AuthorizationError("Kid not found", details={"kid_id": kid_id})
        return kid

    def _get_kid_selection(self, kid_id: int, selection_id: int) -> LunchSelection:
        selection = self.repository.get_selection(selection_id)
        if selection is None or selection.kid_id != kid_id:
            logger.info("selection %s not found for kid %s", selection_id, kid_id)
            raise LockedSelectionError("Selection no longer exists", selection_id=selection_id)
        return selection

    def _require_unlocked(self, selection: LunchSelection):
        if is_locked(selection.date, self.clock.today()):
            logger.info("selection %s on %s is locked", selection.id, selection.date)
            raise LockedSelectionError(
                f"Selection for {selection.date.isoformat()} is locked",
                selection_id=selection.id,
                details={"date": selection.date.isoformat()},
            )

    def _require_selectable(self, day: date):
        if not self.eligibility.is_selectable(day):
            raise ValidationError(
                f"{day.isoformat()} is not open for selection",
                field="date",
                details={"date": day.isoformat()},
            )
