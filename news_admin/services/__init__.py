"""
Services Module - Screen State

One service per admin screen (news feed, search overlay, publisher list),
each owning its own synchronization state.
"""

from functools import lru_cache

from news_admin.services.feed_service import FeedService
from news_admin.services.search_service import SearchService
from news_admin.services.publisher_service import PublisherService

__all__ = [
    "FeedService",
    "SearchService",
    "PublisherService",
    "get_feed_service",
    "get_search_service",
    "get_publisher_service",
]


# Tools share one instance per screen so paging and polling survive between calls

@lru_cache(maxsize=1)
def get_feed_service() -> FeedService:
    return FeedService()


@lru_cache(maxsize=1)
def get_search_service() -> SearchService:
    return SearchService()


@lru_cache(maxsize=1)
def get_publisher_service() -> PublisherService:
    return PublisherService()
