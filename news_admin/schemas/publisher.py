"""
Schemas - Publisher Models

Pydantic models for news publishers.
"""

import re
from pydantic import BaseModel, field_validator
from typing import List, Optional

from news_admin.schemas.news import Pagination


DOMAIN_PATTERN = re.compile(r"^[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class Publisher(BaseModel):
    """A publisher registered with the backend."""
    id: str
    name: str
    domain: str
    description: Optional[str] = None
    website: Optional[str] = None

    model_config = {"extra": "ignore"}


class PublisherPage(BaseModel):
    """`{data: Publisher[], pagination?}` envelope."""
    data: List[Publisher] = []
    pagination: Optional[Pagination] = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return value if value is not None else []


class PublisherEnvelope(BaseModel):
    """`{data: Publisher}` envelope."""
    data: Publisher


class PublisherCreate(BaseModel):
    """Submission payload for a new publisher."""
    name: str
    domain: str
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("domain", mode="before")
    @classmethod
    def _validate_domain(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Domain is required")
        if not DOMAIN_PATTERN.match(value):
            raise ValueError("Please enter a valid domain (e.g., example.com)")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value):
        if value is None:
            return None
        value = value.strip()
        return value or None
