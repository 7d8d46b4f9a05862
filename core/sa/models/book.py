# core/sa/models/book.py
from datetime import datetime
from sqlalchemy import String, Integer, Float, Text, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin
from core.models.book import ReadingStatus

class Book(Base, TimestampMixin):
    """One user's relationship to one book (a library entry)."""
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(500), nullable=False)
    cover_url: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ReadingStatus.WANT.value)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    completed_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    progress: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    published_date: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    user = relationship('User', back_populates='books')

    __table_args__ = (
        Index('idx_book_user_status', 'user_id', 'status'),
        Index('idx_book_created_at', 'created_at'),
        {'sqlite_autoincrement': True}
    )
