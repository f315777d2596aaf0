"""
Business logic services.
ServiceContainer wires one repository and one clock into every service.
"""

from typing import Optional

from ..core.clock import Clock
from ..core.security import SecurityManager
from ..repositories.base import LunchRepository
from .admin_service import AdminService
from .audit_service import AuditTrail
from .auth_service import AuthService
from .eligibility import EligibilityService
from .kid_service import KidService
from .menu_service import MenuService
from .selection_service import SelectionService


class ServiceContainer:
    """Explicitly constructed service graph; one per application instance"""

    def __init__(self, repository: LunchRepository, security: SecurityManager,
                 clock: Optional[Clock] = None, admin_usernames: Optional[set] = None):
        self.repository = repository
        self.security = security
        self.clock = clock or Clock()

        self.eligibility = EligibilityService(repository, self.clock)
        self.menu = MenuService(repository)
        self.audit = AuditTrail(repository, self.clock)
        self.selections = SelectionService(
            repository, self.eligibility, self.menu, self.audit, self.clock
        )
        self.kids = KidService(repository)
        self.auth = AuthService(repository, security, self.clock, admin_usernames)
        self.admin = AdminService(repository, self.clock)


__all__ = [
    "AdminService",
    "AuditTrail",
    "AuthService",
    "EligibilityService",
    "KidService",
    "MenuService",
    "SelectionService",
    "ServiceContainer",
]
