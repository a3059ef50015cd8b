"""Starter notes and categories for demo and guest accounts."""

import math
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Category, Note
from app.utils.constants import DEFAULT_NOTE_COLOR, NOTE_COLORS
from app.utils.logger import get_logger

logger = get_logger("demo_data")

DEMO_CATEGORY_NAMES = ["Coffee", "Shopping", "Recipes", "Work", "Personal", "Ideas"]


def _checklist(items: list[tuple[str, bool]]) -> str:
    """Render a task list in the editor's HTML format."""
    rendered = []
    for text, checked in items:
        checked_attr = ' checked="checked"' if checked else ""
        rendered.append(
            f'<li data-type="taskItem" data-checked="{"true" if checked else "false"}">'
            f'<label><input type="checkbox"{checked_attr} /><span></span></label>'
            f"<div><p>{text}</p></div></li>"
        )
    return f'<ul data-type="taskList">{"".join(rendered)}</ul>'


# (title, content, is_archived, is_deleted, category names)
DEMO_NOTES: list[tuple[str, str, bool, bool, list[str]]] = [
    ("Espresso Journal",
     "<p>Trying a new single-origin espresso today.</p><p>Notes: juicy, blackberry, cocoa finish.</p>",
     False, False, ["Coffee"]),
    ("Dial-in: 18g in / 36g out",
     "<p>Recipe:</p><p>18g in · 36g out · 28s · 93°C</p><p>Adjust grind finer if sour.</p>",
     False, False, ["Coffee", "Ideas"]),
    ("Grocery list",
     _checklist([("Milk", False), ("Eggs", False), ("Tomatoes", False), ("Olive oil", True)]),
     False, False, ["Shopping"]),
    ("Pasta alla vodka",
     "<p>Ingredients:</p><p>Tomato paste, vodka, cream, chili flakes, parmesan.</p><p>Finish with basil.</p>",
     False, False, ["Recipes"]),
    ("Weekend brunch",
     "<p>Plan: pancakes, eggs benedict, fresh fruit.</p><p>Prep list: batter, hollandaise, berries, coffee.</p>",
     True, False, ["Personal", "Recipes"]),
    ("Project kickoff",
     "<p>Agenda: scope, milestones, risks, owners.</p><p>Questions: decision log, comms cadence.</p><p>Next: draft timeline.</p>",
     True, False, ["Work"]),
    ("Coffee gear wishlist",
     "<p>58mm tamper, VST basket, distribution tool.</p>",
     False, False, ["Coffee", "Ideas"]),
    ("Trash: old reminder",
     "<p>Cancel dentist appointment.</p><p>Reschedule for next month.</p>",
     False, True, ["Personal"]),
    ("Trash: shopping draft",
     "<p>Store run: cereal, yogurt, coffee filters.</p><p>Check discounts on oat milk.</p>",
     False, True, ["Shopping"]),
    ("Meeting notes",
     "<p>Decisions: finalize UI, confirm timeline, assign QA.</p>",
     False, False, ["Work"]),
    ("Ethiopia washed espresso",
     "<p>Floral aroma, peach, bergamot.</p><p>Grind slightly finer for sweetness.</p>",
     False, False, ["Coffee"]),
    ("Iced latte ratios",
     "<p>1:2 espresso to milk, add ice last.</p>",
     False, False, ["Coffee"]),
    ("Super list - pantry",
     _checklist([("Rice", False), ("Beans", False), ("Pasta", False)]),
     False, False, ["Shopping"]),
    ("Recipe: Tomato soup",
     "<p>Roast tomatoes, blend with garlic and onion, finish with cream.</p>",
     False, False, ["Recipes"]),
    ("Weekly goals",
     "<p>Ship label UI, fix drag edge case, write docs.</p>",
     False, False, ["Work", "Ideas"]),
    ("Ideas: espresso bar layout",
     "<p>Floating shelf, tamp station, cup rail.</p>",
     False, False, ["Ideas", "Coffee"]),
    ("Archive: summer menu",
     "<p>Cold brew, affogato, citrus spritz.</p><p>Consider adding tonic espresso.</p>",
     True, False, ["Coffee"]),
    ("Archive: grocery pricing",
     "<p>Track weekly prices for staples.</p><p>Note seasonal swings for produce.</p><p>Compare two nearby stores.</p>",
     True, False, ["Shopping"]),
    ("Trash: old recipe",
     "<p>Delete this draft recipe.</p><p>Too salty, needs retest.</p>",
     False, True, ["Recipes"]),
    ("Trash: canceled task",
     "<p>Remove unused task list.</p><p>No longer needed after scope change.</p>",
     False, True, ["Work"]),
    ("Pour over notes",
     "<p>15g coffee, 250g water, 2:45 total time.</p>",
     False, False, ["Coffee"]),
    ("Quick lunch ideas",
     "<p>Caprese sandwich, avocado toast, miso soup.</p>",
     False, False, ["Personal", "Recipes"]),
    ("Recipe: Overnight oats",
     "<p>Oats, milk, chia, honey. Rest overnight.</p>",
     False, False, ["Recipes"]),
    ("Weekly errands",
     _checklist([("Post office", False), ("Pick up meds", False)]),
     False, False, ["Personal", "Shopping"]),
    ("Design backlog",
     "<p>Sidebar spacing, label popup, theme contrast.</p>",
     False, False, ["Work"]),
    ("Recipe: Lemon pasta",
     "<p>Lemon zest, olive oil, garlic, parmesan.</p>",
     False, False, ["Recipes"]),
    ("Coffee: grinder cleanup",
     "<p>Brush burrs, vacuum chute, wipe hopper.</p>",
     False, False, ["Coffee"]),
    ("Archive: travel checklist",
     "<p>Passport, chargers, headphones, adapter.</p><p>Pack meds, sunglasses, water bottle.</p>",
     True, False, ["Personal"]),
    ("Trash: old idea",
     "<p>Drop this feature experiment.</p><p>Didn't fit the UX direction.</p>",
     False, True, ["Ideas"]),
    ("Shopping: weekend market",
     "<p>Berries, sourdough, fresh herbs.</p>",
     False, False, ["Shopping"]),
]

TRANSPARENT_RATE = 0.3
EXTRA_PINNED = 2


def _seeded_random(seed: int) -> Callable[[], float]:
    """Small LCG so every seeded account gets the same colors."""
    state = seed or 1

    def next_value() -> float:
        nonlocal state
        state = (state * 9301 + 49297) % 233280
        return state / 233280

    return next_value


def pinned_indexes(notes: list[tuple[str, str, bool, bool, list[str]]]) -> set[int]:
    """Pin ~10% of the active notes from the top plus a couple from the bottom."""
    active = [i for i, (_, _, archived, deleted, _) in enumerate(notes) if not archived and not deleted]
    if not active:
        return set()
    pinned_count = max(1, math.floor(len(active) * 0.1 + 0.5))
    pinned = set(active[:pinned_count])
    extra_needed = max(0, pinned_count + EXTRA_PINNED - len(pinned))
    if extra_needed:
        candidates = [i for i in active if i not in pinned]
        pinned.update(candidates[-extra_needed:])
    return pinned


def note_colors(notes: list[tuple[str, str, bool, bool, list[str]]]) -> list[str]:
    random = _seeded_random(sum(len(title) for title, *_ in notes))
    colors = []
    for _ in notes:
        if random() < TRANSPARENT_RATE:
            colors.append(DEFAULT_NOTE_COLOR)
        else:
            colors.append(NOTE_COLORS[math.floor(random() * len(NOTE_COLORS))])
    return colors


class DemoDataService:
    """Populates a fresh account with the fixed starter notes and labels."""

    def __init__(self, notes: list[tuple[str, str, bool, bool, list[str]]] | None = None):
        self.notes = notes if notes is not None else DEMO_NOTES

    async def seed_demo_data(self, user_id: int, db: AsyncSession) -> int:
        """Create the starter categories and notes for ``user_id`` in ``db``.

        Not idempotent; call once per freshly created account. The caller owns
        the transaction.

        Returns:
            Number of notes created
        """
        categories = {name: Category(name=name, user_id=user_id) for name in DEMO_CATEGORY_NAMES}
        db.add_all(categories.values())

        pinned = pinned_indexes(self.notes)
        colors = note_colors(self.notes)

        for index, (title, content, archived, deleted, category_names) in enumerate(self.notes):
            db.add(
                Note(
                    user_id=user_id,
                    title=title,
                    content=content,
                    is_archived=archived,
                    is_deleted=deleted,
                    is_pinned=index in pinned,
                    position=index,
                    color=colors[index],
                    categories=[categories[name] for name in category_names],
                )
            )

        await db.flush()
        logger.debug(f"Seeded {len(self.notes)} demo notes for user {user_id}")
        return len(self.notes)


# Global instance
demo_data_service = DemoDataService()
