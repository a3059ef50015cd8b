"""Pydantic schemas for request/response validation"""

from app.schemas.common import (
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
)
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserPublic,
)
from app.schemas.category import (
    CategoryBrief,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from app.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NotePosition,
    NoteResponse,
    NoteUpdate,
    ReorderRequest,
    ReorderResponse,
)

__all__ = [
    # Common
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    # Auth
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenPayload",
    "UserPublic",
    # Category
    "CategoryBrief",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    # Note
    "NoteCreate",
    "NoteListResponse",
    "NotePosition",
    "NoteResponse",
    "NoteUpdate",
    "ReorderRequest",
    "ReorderResponse",
]
