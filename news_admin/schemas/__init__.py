"""
Schemas Module - Pydantic Models

Data models for news articles, publishers, search queries, and errors.
"""

from news_admin.schemas.news import (
    NewsStatus,
    NewsItem,
    Pagination,
    NewsPage,
    NewsEnvelope,
    SuggestionsEnvelope,
    NewsCreate,
    NewsFilters,
    patch_item,
)
from news_admin.schemas.publisher import (
    Publisher,
    PublisherPage,
    PublisherEnvelope,
    PublisherCreate,
)
from news_admin.schemas.search import PageDescriptor, tokenize
from news_admin.schemas.errors import ErrorDetail, ErrorEnvelope

__all__ = [
    "NewsStatus",
    "NewsItem",
    "Pagination",
    "NewsPage",
    "NewsEnvelope",
    "SuggestionsEnvelope",
    "NewsCreate",
    "NewsFilters",
    "patch_item",
    "Publisher",
    "PublisherPage",
    "PublisherEnvelope",
    "PublisherCreate",
    "PageDescriptor",
    "tokenize",
    "ErrorDetail",
    "ErrorEnvelope",
]
