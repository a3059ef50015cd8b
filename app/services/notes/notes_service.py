"""Notes service: owner-scoped note CRUD, listing and reordering"""

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import and_, false, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Category, Note
from app.schemas.note import NoteCreate, NoteUpdate
from app.utils.constants import DEFAULT_NOTE_COLOR, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.utils.logger import get_logger

logger = get_logger("notes")


def parse_category_ids(raw: Optional[str]) -> list[int]:
    """Parse a comma separated id list, dropping anything non-numeric."""
    if not raw:
        return []
    ids = []
    for part in raw.split(","):
        part = part.strip()
        try:
            ids.append(int(part))
        except ValueError:
            continue
    return ids


class NotesService:
    """Every operation is scoped to the owning user; foreign notes are 404."""

    async def list_notes(
        self,
        user_id: int,
        db: AsyncSession,
        *,
        is_archived: bool = False,
        is_deleted: bool = False,
        category_ids: Optional[list[int]] = None,
        search: Optional[str] = None,
        cursor: Optional[int] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        has_reminder: bool = False,
    ) -> tuple[list[Note], Optional[int]]:
        """
        One page of notes, pinned first, then by position, newest id last.

        The trash view (is_deleted) ignores the archive flag. ``cursor`` is the
        id of the last note of the previous page.

        Returns:
            (notes, next_cursor) where next_cursor is None on the last page
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))

        query = select(Note).where(Note.user_id == user_id)
        if is_deleted:
            query = query.where(Note.is_deleted.is_(True))
        else:
            query = query.where(
                Note.is_deleted.is_(False),
                Note.is_archived.is_(is_archived),
            )

        if category_ids:
            query = query.where(Note.categories.any(Category.id.in_(category_ids)))

        if search:
            query = query.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                )
            )

        if has_reminder:
            query = query.where(Note.reminder.is_not(None))

        if cursor is not None:
            anchor = await db.get(Note, cursor)
            if anchor is None or anchor.user_id != user_id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid cursor")
            query = query.where(self._after(anchor))

        query = query.order_by(
            Note.is_pinned.desc(),
            Note.position.asc(),
            Note.id.desc(),
        ).limit(limit + 1)

        result = await db.execute(query)
        notes = list(result.scalars().all())

        next_cursor = None
        if len(notes) > limit:
            notes = notes[:limit]
            next_cursor = notes[-1].id
        return notes, next_cursor

    @staticmethod
    def _after(anchor: Note):
        """Keyset predicate for rows sorting strictly after ``anchor``."""
        same_pin = Note.is_pinned == anchor.is_pinned
        return or_(
            Note.is_pinned == False if anchor.is_pinned else false(),  # noqa: E712
            and_(same_pin, Note.position > anchor.position),
            and_(same_pin, Note.position == anchor.position, Note.id < anchor.id),
        )

    async def get_note(self, user_id: int, note_id: int, db: AsyncSession) -> Note:
        result = await db.execute(
            select(Note)
            .where(Note.id == note_id, Note.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        note = result.scalar_one_or_none()
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return note

    async def _owned_categories(
        self, user_id: int, category_ids: list[int], db: AsyncSession
    ) -> list[Category]:
        """Categories among ``category_ids`` that belong to the user."""
        if not category_ids:
            return []
        result = await db.execute(
            select(Category)
            .where(Category.user_id == user_id, Category.id.in_(category_ids))
            .order_by(Category.id)
        )
        return list(result.scalars().all())

    async def create_note(self, user_id: int, data: NoteCreate, db: AsyncSession) -> Note:
        note = Note(
            user_id=user_id,
            title=data.title,
            content=data.content,
            color=data.color or DEFAULT_NOTE_COLOR,
            reminder=data.reminder,
        )
        note.categories = await self._owned_categories(user_id, data.category_ids or [], db)
        db.add(note)
        await db.commit()

        logger.info(f"Created note {note.id} for user {user_id}")
        return await self.get_note(user_id, note.id, db)

    async def update_note(
        self, user_id: int, note_id: int, data: NoteUpdate, db: AsyncSession
    ) -> Note:
        """Apply the fields present in the request; category_ids replaces the set."""
        note = await self.get_note(user_id, note_id, db)
        changes = data.model_dump(exclude_unset=True)

        category_ids = changes.pop("category_ids", None)
        if category_ids is not None:
            note.categories = await self._owned_categories(user_id, category_ids, db)

        for field in ("title", "content", "color", "is_archived", "is_pinned"):
            # Explicit nulls only make sense for the reminder
            if changes.get(field) is not None:
                setattr(note, field, changes[field])
        if "reminder" in changes:
            note.reminder = changes["reminder"]

        await db.commit()
        return await self.get_note(user_id, note_id, db)

    async def _set_deleted(
        self, user_id: int, note_id: int, deleted: bool, db: AsyncSession
    ) -> Note:
        note = await self.get_note(user_id, note_id, db)
        note.is_deleted = deleted
        await db.commit()
        return await self.get_note(user_id, note_id, db)

    async def trash_note(self, user_id: int, note_id: int, db: AsyncSession) -> Note:
        """Move a note to the trash."""
        return await self._set_deleted(user_id, note_id, True, db)

    async def restore_note(self, user_id: int, note_id: int, db: AsyncSession) -> Note:
        """Bring a note back from the trash."""
        return await self._set_deleted(user_id, note_id, False, db)

    async def delete_note_permanently(self, user_id: int, note_id: int, db: AsyncSession) -> None:
        note = await self.get_note(user_id, note_id, db)
        await db.delete(note)
        await db.commit()
        logger.info(f"Permanently deleted note {note_id} for user {user_id}")

    async def reorder_notes(
        self, user_id: int, positions: list[tuple[int, int]], db: AsyncSession
    ) -> int:
        """
        Set positions of the user's notes in one transaction.

        Ids belonging to other users are ignored.

        Returns:
            Number of notes updated
        """
        updated = 0
        try:
            for note_id, position in positions:
                result = await db.execute(
                    update(Note)
                    .where(Note.id == note_id, Note.user_id == user_id)
                    .values(position=position)
                    .execution_options(synchronize_session=False)
                )
                updated += result.rowcount
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return updated


# Global instance
notes_service = NotesService()
