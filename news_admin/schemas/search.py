"""
Schemas - Search Models

Query tokenization and page descriptors shared by search and listing flows.
"""

from pydantic import BaseModel, Field
from typing import List


def tokenize(text: str) -> List[str]:
    """Split free text on whitespace into ordered, non-empty keyword tokens."""
    return (text or "").split()


class PageDescriptor(BaseModel):
    """1-based page number and a fixed page size."""
    page: int = Field(default=1, ge=1)
    size: int = Field(default=30, ge=1)
