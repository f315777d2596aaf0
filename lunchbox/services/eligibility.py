"""
Eligibility evaluator.
Decides which calendar dates of a month are open for lunch selection.

Rules:
- the earliest selectable date is tomorrow; today and the past are locked
- the last selectable date is the last day of the requested month
- Sundays and holidays are never selectable
- there is no fallback when tomorrow itself is excluded
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Set, Tuple

from ..core.clock import Clock
from ..core.exceptions import ValidationError
from ..models.holiday import Holiday
from ..repositories.base import LunchRepository

SUNDAY = 6


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month"""
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}", field="year")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def is_locked(day: date, today: date) -> bool:
    """A selection is locked once its date is earlier than tomorrow"""
    return day < today + timedelta(days=1)


def is_selectable(day: date, holidays: Iterable[date], today: date) -> bool:
    if is_locked(day, today):
        return False
    if day.weekday() == SUNDAY:
        return False
    return day not in set(holidays)


def selectable_dates(year: int, month: int, holidays: Iterable[date], today: date) -> List[date]:
    """Sorted selectable dates of the month as seen from ``today``"""
    first, last = month_bounds(year, month)
    excluded: Set[date] = set(holidays)
    start = max(first, today + timedelta(days=1))

    result = []
    for offset in range((last - start).days + 1):
        day = start + timedelta(days=offset)
        if day.weekday() != SUNDAY and day not in excluded:
            result.append(day)
    return result


class EligibilityService:
    """Eligibility queries backed by the holiday calendar"""

    def __init__(self, repository: LunchRepository, clock: Clock):
        self.repository = repository
        self.clock = clock

    def holidays_for_month(self, year: int, month: int) -> List[Holiday]:
        first, last = month_bounds(year, month)
        return self.repository.list_holidays(first, last)

    def selectable_dates(self, year: int, month: int) -> List[date]:
        holidays = [h.date for h in self.holidays_for_month(year, month)]
        return selectable_dates(year, month, holidays, self.clock.today())

    def is_locked(self, day: date) -> bool:
        return is_locked(day, self.clock.today())

    def is_selectable(self, day: date) -> bool:
        holidays = [h.date for h in self.repository.list_holidays(day, day)]
        return is_selectable(day, holidays, self.clock.today())
