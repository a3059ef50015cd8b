from app.services.notes.notes_service import NotesService, notes_service, parse_category_ids

__all__ = ["NotesService", "notes_service", "parse_category_ids"]
