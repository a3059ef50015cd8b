from app.db.database import Base
from app.models.user import User
from app.models.note import Note, note_categories
from app.models.category import Category

__all__ = [
    "Base",
    "User",
    "Note",
    "Category",
    "note_categories",
]
