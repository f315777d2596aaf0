"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import admin, auth, kids, menu, selections, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(kids.router, prefix="/kids", tags=["kids"])
api_router.include_router(selections.router, prefix="/kids", tags=["lunch-selections"])
# /menu, /holidays and /eligibility share the calendar router
api_router.include_router(menu.router, prefix="", tags=["menu"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
