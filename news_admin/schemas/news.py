"""
Schemas - News Models

Pydantic models for news articles and the backend's response envelopes.
"""

import re
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime


URL_PATTERN = re.compile(r"^https?://.+\..+")


class NewsStatus(str, Enum):
    """Processing status of an article on the backend.

    ``added`` is the pending state a freshly submitted article starts in;
    ``synced`` and ``failed`` are terminal.
    """
    ADDED = "added"
    SYNCED = "synced"
    FAILED = "failed"

    @property
    def is_pending(self) -> bool:
        return self is NewsStatus.ADDED

    @property
    def is_terminal(self) -> bool:
        return not self.is_pending


class NewsItem(BaseModel):
    """A news article as returned by the backend."""
    id: str
    title: str = ""
    thumbnail: Optional[str] = None
    status: NewsStatus = NewsStatus.ADDED
    published_at: Optional[datetime] = None
    author: Optional[str] = None
    content: Optional[str] = None

    model_config = {"extra": "ignore"}


# Fields refreshed on an item when a status poll observes a terminal status
PATCH_FIELDS = ("title", "thumbnail", "status", "published_at", "author", "content")


def patch_item(current: NewsItem, update: NewsItem) -> NewsItem:
    """Overlay ``update`` onto ``current``, keeping current values where the
    update leaves a field empty."""
    changes = {}
    for name in PATCH_FIELDS:
        value = getattr(update, name)
        if value is None or value == "":
            continue
        changes[name] = value
    return current.model_copy(update=changes)


class Pagination(BaseModel):
    """Pagination metadata supplied by listing endpoints."""
    page: int = 1
    size: int = 0
    total: int = 0
    total_pages: int = 0


class NewsPage(BaseModel):
    """`{data: Item[], pagination?}` envelope."""
    data: List[NewsItem] = []
    pagination: Optional[Pagination] = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return value if value is not None else []


class NewsEnvelope(BaseModel):
    """`{data: Item}` envelope for a single article."""
    data: NewsItem


class SuggestionsEnvelope(BaseModel):
    """`{data: string[]}` envelope of keyword suggestions."""
    data: List[str] = []

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return value if value is not None else []


class NewsCreate(BaseModel):
    """Submission payload for a new article."""
    url: str
    category: Literal["military", "finance"]

    @field_validator("url", mode="before")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("URL is required")
        if not URL_PATTERN.match(value):
            raise ValueError(
                "Please enter a valid URL (e.g., https://example.com/article)"
            )
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _strip_category(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Category is required")
        return value


class NewsFilters(BaseModel):
    """Date range and status filters of the news feed."""
    date_from: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    date_to: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: Optional[NewsStatus] = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_params(self) -> dict:
        """Query parameters for `GET /news`, dates as RFC3339 day bounds."""
        params = {}
        if self.date_from:
            params["from"] = f"{self.date_from}T00:00:00Z"
        if self.date_to:
            params["to"] = f"{self.date_to}T23:59:59Z"
        if self.status is not None:
            params["status"] = self.status.value
        return params
