"""Notes router for CRUD, trash and reordering"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.models import User
from app.schemas.common import MessageResponse
from app.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    ReorderRequest,
    ReorderResponse,
)
from app.services.auth import get_current_user
from app.services.notes import notes_service, parse_category_ids
from app.utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=NoteListResponse)
async def list_notes(
    is_archived: bool = Query(False, alias="isArchived"),
    is_deleted: bool = Query(False, alias="isDeleted"),
    category_id: int | None = Query(None, alias="categoryId"),
    category_ids: str | None = Query(None, alias="categoryIds"),
    search: str | None = None,
    cursor: int | None = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    has_reminder: bool = Query(False, alias="hasReminder"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List the user's notes with optional filters.

    ``categoryIds`` is comma separated; a note matches when it carries any of
    the given categories. Pass ``nextCursor`` from the previous page as
    ``cursor`` to continue.
    """
    wanted_categories = parse_category_ids(category_ids)
    if category_id is not None:
        wanted_categories.append(category_id)

    notes, next_cursor = await notes_service.list_notes(
        user.id,
        db,
        is_archived=is_archived,
        is_deleted=is_deleted,
        category_ids=wanted_categories,
        search=search or None,
        cursor=cursor,
        limit=limit,
        has_reminder=has_reminder,
    )
    return NoteListResponse(
        items=[NoteResponse.model_validate(n) for n in notes],
        next_cursor=next_cursor,
    )


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    body: NoteCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a note; category ids the user does not own are ignored."""
    return await notes_service.create_note(user.id, body, db)


# Declared before /{note_id} so "reorder" is not parsed as an id
@router.put("/reorder", response_model=ReorderResponse)
async def reorder_notes(
    body: ReorderRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Persist drag-and-drop positions for the user's notes."""
    updated = await notes_service.reorder_notes(
        user.id, [(item.id, item.position) for item in body.notes], db
    )
    return ReorderResponse(updated=updated)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await notes_service.get_note(user.id, note_id, db)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    body: NoteUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partially update a note. ``categoryIds`` replaces the whole set."""
    return await notes_service.update_note(user.id, note_id, body, db)


@router.delete("/{note_id}", response_model=NoteResponse)
async def trash_note(
    note_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a note to the trash."""
    return await notes_service.trash_note(user.id, note_id, db)


@router.post("/{note_id}/restore", response_model=NoteResponse)
async def restore_note(
    note_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await notes_service.restore_note(user.id, note_id, db)


@router.delete("/{note_id}/permanent", response_model=MessageResponse)
async def delete_note_permanently(
    note_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a note for good."""
    await notes_service.delete_note_permanently(user.id, note_id, db)
    return MessageResponse(message="Note deleted")
