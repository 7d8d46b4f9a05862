# core/sa/models/note.py
from sqlalchemy import Integer, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin

class ReadingNote(Base, TimestampMixin):
    """Free-text annotation on a library entry.

    book_id carries no foreign key constraint: whether notes outlive their
    book is decided by the note delete policy, not by the schema.
    """
    __tablename__ = 'reading_note'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    quote_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    thought_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    page: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index('idx_reading_note_book_id', 'book_id'),
        {'sqlite_autoincrement': True}
    )
