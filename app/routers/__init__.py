"""API routers module"""

from app.routers.auth import router as auth_router
from app.routers.notes import router as notes_router
from app.routers.categories import router as categories_router

__all__ = [
    "auth_router",
    "notes_router",
    "categories_router",
]
