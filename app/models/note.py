"""Note model and the note/category link table"""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.utils.constants import DEFAULT_NOTE_COLOR

note_categories = Table(
    "note_categories",
    Base.metadata,
    Column("note_id", Integer, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Note(Base):
    """A note or checklist; content is the editor's HTML document"""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False)
    color = Column(String(20), default=DEFAULT_NOTE_COLOR, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False, index=True)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    is_pinned = Column(Boolean, default=False, nullable=False)
    position = Column(Integer, default=0, nullable=False)
    reminder = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="notes")
    categories = relationship(
        "Category",
        secondary=note_categories,
        lazy="selectin",
        order_by="Category.id",
    )

    def __repr__(self):
        return f"<Note(id={self.id}, title='{self.title}')>"
