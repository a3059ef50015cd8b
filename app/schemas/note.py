"""Note schemas for CRUD, listing and reordering"""

from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.category import CategoryBrief


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class NoteCreate(CamelModel):
    """Note creation request"""
    title: str = Field(default="", max_length=255)
    content: str = Field(..., min_length=1)
    color: str | None = Field(default=None, max_length=20)
    category_ids: list[int] | None = None
    reminder: datetime | None = None


class NoteUpdate(CamelModel):
    """Partial note update; only fields present in the body are applied"""
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    color: str | None = Field(default=None, max_length=20)
    is_archived: bool | None = None
    is_pinned: bool | None = None
    category_ids: list[int] | None = None
    reminder: datetime | None = None


class NoteResponse(CamelModel):
    """Note response"""
    id: int
    title: str
    content: str
    color: str
    is_archived: bool
    is_deleted: bool
    is_pinned: bool
    position: int
    reminder: datetime | None = None
    user_id: int
    categories: list[CategoryBrief] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NoteListResponse(CamelModel):
    """One page of notes; next_cursor is None on the last page"""
    items: list[NoteResponse]
    next_cursor: int | None = None


class NotePosition(BaseModel):
    id: int
    position: int


class ReorderRequest(BaseModel):
    """Bulk position update from drag and drop"""
    notes: list[NotePosition]


class ReorderResponse(BaseModel):
    updated: int
