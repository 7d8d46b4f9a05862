# api/schemas.py

from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

from core.models.book import ReadingStatus


class ApiModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class BookSchema(ApiModel):
    id: int
    title: str
    author: str
    cover_url: str
    user_id: int
    status: ReadingStatus
    rating: Optional[float] = None
    completed_date: Optional[datetime] = None
    progress: Optional[int] = None
    notes: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    created_at: datetime


class ReadingNoteSchema(ApiModel):
    id: int
    book_id: int
    content: str
    quote_text: Optional[str] = None
    thought_text: Optional[str] = None
    page: Optional[int] = None
    created_at: datetime


class SearchRequest(ApiModel):
    query: str = Field(default="", validation_alias=AliasChoices("query", "q"))


class ExtractTextResponse(ApiModel):
    original_text: str
    processed_text: str


class ErrorDetail(BaseModel):
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    message: str
    errors: List[ErrorDetail] = []


class HealthResponse(BaseModel):
    status: str
    storage: str
