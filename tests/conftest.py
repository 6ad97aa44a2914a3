"""
Shared test helpers.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from news_admin.config import BackendSettings, Settings, SyncSettings
from news_admin.schemas.news import NewsItem, NewsPage, Pagination


def make_settings(**sync) -> Settings:
    """Settings with fast timers; keyword names are the env aliases."""
    values = {
        "SUGGESTION_DEBOUNCE_MS": 20,
        "POLL_INTERVAL_SECONDS": 0.01,
        "POLL_MAX_ATTEMPTS": 12,
    }
    values.update(sync)
    return Settings(
        backend=BackendSettings(NEWS_API_BASE_URL="http://backend.test/api/v1"),
        sync=SyncSettings(**values),
    )


def make_items(start: int, count: int, status: str = "synced"):
    return [
        NewsItem(id=f"n{i}", title=f"Article {i}", status=status)
        for i in range(start, start + count)
    ]


def make_page(items, pagination=None) -> NewsPage:
    return NewsPage(data=items, pagination=pagination)


def make_backend() -> MagicMock:
    backend = MagicMock()
    for name in (
        "suggest",
        "search_news",
        "list_news",
        "get_news",
        "create_news",
        "delete_news",
        "list_publishers",
        "get_publisher",
        "create_publisher",
    ):
        setattr(backend, name, AsyncMock())
    return backend


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def backend():
    return make_backend()
