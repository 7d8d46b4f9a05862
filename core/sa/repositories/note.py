# core/sa/repositories/note.py
from typing import Optional, List, Dict, Any
from sqlalchemy import desc
from sqlalchemy.orm import Session
from core.models.book import utcnow
from core.repositories import NoteRepositoryBase
from ..models import ReadingNote

class NoteRepository(NoteRepositoryBase):
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, note_id: int) -> Optional[ReadingNote]:
        return self.session.query(ReadingNote).filter(ReadingNote.id == note_id).one_or_none()

    def list_by_book(self, book_id: int) -> List[ReadingNote]:
        """Get all notes for a library entry, newest first"""
        return (
            self.session.query(ReadingNote)
            .filter(ReadingNote.book_id == book_id)
            .order_by(desc(ReadingNote.created_at), desc(ReadingNote.id))
            .all()
        )

    def count_by_book(self, book_id: int) -> int:
        return self.session.query(ReadingNote).filter(ReadingNote.book_id == book_id).count()

    def create(self, fields: Dict[str, Any]) -> ReadingNote:
        data = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
        now = utcnow()
        note = ReadingNote(**data, created_at=now, updated_at=now)
        self.session.add(note)
        self.session.commit()
        return note

    def delete(self, note_id: int) -> bool:
        """Delete a note.
        
        Returns:
            True if the note was deleted, False if not found
        """
        result = (
            self.session.query(ReadingNote)
            .filter(ReadingNote.id == note_id)
            .delete()
        )
        self.session.commit()
        return result > 0

    def delete_by_book(self, book_id: int) -> int:
        result = (
            self.session.query(ReadingNote)
            .filter(ReadingNote.book_id == book_id)
            .delete()
        )
        self.session.commit()
        return result
