# core/models/book.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime, timezone
from typing import Optional, List
from enum import Enum


class ReadingStatus(str, Enum):
    WANT = "want"
    READING = "reading"
    COMPLETED = "completed"


class NoteDeletePolicy(str, Enum):
    ORPHAN = "orphan"      # Notes survive their book
    CASCADE = "cascade"    # Notes are removed with their book
    FORBID = "forbid"      # A book with notes cannot be removed


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value):
    """Accept '', dates and 'YYYY-MM-DD' before pydantic parses the rest."""
    if value == "" or value is None:
        return None
    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    return value


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Offset-aware datetimes are converted to UTC and stored without tzinfo."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookCreate(CamelModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    cover_url: str
    user_id: Optional[int] = None
    status: ReadingStatus = ReadingStatus.WANT
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5, multiple_of=0.5)
    completed_date: Optional[datetime] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator('title', 'author', mode='before')
    @classmethod
    def strip_strings(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator('completed_date', mode='before')
    @classmethod
    def validate_dates(cls, value):
        return parse_datetime(value)

    @field_validator('completed_date')
    @classmethod
    def normalize_timezone(cls, value):
        return to_naive_utc(value)


class BookStatusUpdate(CamelModel):
    """Partial update. Only the fields present in the payload are applied."""
    status: ReadingStatus
    rating: Optional[float] = Field(default=None, ge=0, le=5, multiple_of=0.5)
    completed_date: Optional[datetime] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator('completed_date', mode='before')
    @classmethod
    def validate_dates(cls, value):
        return parse_datetime(value)

    @field_validator('completed_date')
    @classmethod
    def normalize_timezone(cls, value):
        return to_naive_utc(value)

    def changes(self) -> dict:
        """The optional fields the caller actually sent, by attribute name."""
        return self.model_dump(exclude_unset=True, exclude={'status'})


class NoteCreate(CamelModel):
    content: Optional[str] = None
    quote_text: Optional[str] = None
    thought_text: Optional[str] = None
    page: Optional[int] = Field(default=None, ge=0)


class SearchResult(CamelModel):
    id: Optional[str] = None
    title: str
    author: str
    cover_url: str
    publisher: Optional[str] = None
    published_date: Optional[str] = None


class SearchResponse(CamelModel):
    results: List[SearchResult] = []
    total: int = 0
    error: Optional[str] = None
