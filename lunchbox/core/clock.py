"""
Clock abstraction.
Services ask the clock for "now" on every call so the lock window is never stale.
"""

from datetime import date, datetime, timedelta


class Clock:
    """System wall clock (local time)"""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()

    def tomorrow(self) -> date:
        return self.today() + timedelta(days=1)


class FixedClock(Clock):
    """Clock pinned to a given instant; used by tests and for replaying scenarios"""

    def __init__(self, current: datetime):
        if not isinstance(current, datetime):
            current = datetime.combine(current, datetime.min.time())
        self.current = current

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime):
        if not isinstance(current, datetime):
            current = datetime.combine(current, datetime.min.time())
        self.current = current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)
