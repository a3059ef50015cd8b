from sqlalchemy import func, select

from app.models import Category, Note, User
from app.services.demo_data import DemoDataService, demo_data_service
from app.services.demo_data.demo_data_service import (
    DEMO_CATEGORY_NAMES,
    DEMO_NOTES,
    note_colors,
    pinned_indexes,
)
from app.utils.constants import DEFAULT_NOTE_COLOR, NOTE_COLORS


def test_pinned_indexes_cover_start_and_end_of_active_notes():
    pinned = pinned_indexes(DEMO_NOTES)
    active = [i for i, note in enumerate(DEMO_NOTES) if not note[2] and not note[3]]

    assert pinned <= set(active)
    assert active[0] in pinned
    assert active[-1] in pinned
    assert len(pinned) >= 3


def test_note_colors_are_deterministic():
    colors = note_colors(DEMO_NOTES)

    assert colors == note_colors(DEMO_NOTES)
    assert len(colors) == len(DEMO_NOTES)
    assert set(colors) <= set(NOTE_COLORS) | {DEFAULT_NOTE_COLOR}


async def test_seed_demo_data_creates_categories_and_notes(db):
    user = User(email="seed@example.com", username="seed", password_hash="x")
    db.add(user)
    await db.flush()

    created = await demo_data_service.seed_demo_data(user.id, db)
    await db.commit()

    assert created == len(DEMO_NOTES)

    names = (
        await db.execute(select(Category.name).where(Category.user_id == user.id).order_by(Category.id))
    ).scalars().all()
    assert names == list(DEMO_CATEGORY_NAMES)

    notes = (
        await db.execute(select(Note).where(Note.user_id == user.id).order_by(Note.position))
    ).scalars().all()
    assert [n.title for n in notes] == [title for title, *_ in DEMO_NOTES]
    assert [n.position for n in notes] == list(range(len(DEMO_NOTES)))
    assert any(n.is_archived for n in notes)
    assert any(n.is_deleted for n in notes)
    assert any(n.categories for n in notes)


async def test_seed_with_custom_notes(db):
    user = User(email="small@example.com", username="small", password_hash="x")
    db.add(user)
    await db.flush()

    seeder = DemoDataService(notes=[("Only note", "<p>hi</p>", False, False, ["Work"])])
    await seeder.seed_demo_data(user.id, db)
    await db.commit()

    note = (await db.execute(select(Note).where(Note.user_id == user.id))).scalar_one()
    assert note.is_pinned
    assert [c.name for c in note.categories] == ["Work"]

    count = (
        await db.execute(select(func.count(Category.id)).where(Category.user_id == user.id))
    ).scalar_one()
    assert count == len(DEMO_CATEGORY_NAMES)
