"""
Services - Feed Service

The news feed: filtered listing with infinite scroll, article submission
with background status polling, and deletion.
"""

import asyncio
import logging
from typing import List, Optional

from news_admin.config import get_settings
from news_admin.client.backend import NewsBackend
from news_admin.schemas.news import (
    NewsCreate,
    NewsFilters,
    NewsItem,
    NewsPage,
    NewsStatus,
    patch_item,
)
from news_admin.schemas.search import PageDescriptor
from news_admin.sync.polling import StatusPoller
from news_admin.sync.results import PaginatedFetcher
from news_admin.sync.scroll import ScrollPosition, ScrollTrigger

logger = logging.getLogger(__name__)


class FeedService:
    """State of one news feed screen."""

    def __init__(self, settings=None, backend: Optional[NewsBackend] = None):
        self.settings = settings or get_settings()
        self.backend = backend or NewsBackend(self.settings)
        sync = self.settings.sync

        self.filters = NewsFilters()
        self.feed = PaginatedFetcher(self._load_page, page_size=sync.feed_page_size)
        self.scroll = ScrollTrigger(
            self.feed,
            threshold=sync.feed_scroll_threshold,
            respect_total_pages=True,
        )
        self.poller = StatusPoller(
            self.backend.get_news,
            self._apply_status,
            interval=sync.poll_interval_seconds,
            max_attempts=sync.poll_max_attempts,
        )

    async def _load_page(self, tokens: List[str], page: PageDescriptor) -> NewsPage:
        return await self.backend.list_news(self.filters, page.page, page.size)

    @property
    def items(self) -> List[NewsItem]:
        return self.feed.results.to_list()

    async def refresh(self) -> bool:
        """Reload page 1 with the current filters."""
        return await self.feed.fetch([], page=1, append=False)

    async def apply_filters(
        self,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        status: Optional[NewsStatus] = None,
    ) -> bool:
        """
        Replace the filters and reload.

        Args:
            date_from: first day, YYYY-MM-DD
            date_to: last day (inclusive), YYYY-MM-DD
            status: only articles in this status
        """
        self.filters = NewsFilters(date_from=date_from, date_to=date_to, status=status)
        return await self.refresh()

    async def clear_filters(self) -> bool:
        self.filters = NewsFilters()
        return await self.refresh()

    def on_scroll(self, position: ScrollPosition) -> Optional[asyncio.Task]:
        return self.scroll.on_scroll(position)

    async def load_more(self) -> bool:
        if not self.scroll.ready:
            return False
        return await self.feed.fetch_next()

    async def get_news(self, news_id: str) -> Optional[NewsItem]:
        return await self.backend.get_news(news_id)

    async def add_news(self, url: str, category: str) -> NewsItem:
        """
        Submit an article and start polling its processing status.

        The created article is shown first in the feed straight away.

        Raises:
            pydantic.ValidationError: invalid url or category
            BackendError: the backend rejected the submission
        """
        payload = NewsCreate(url=url, category=category)
        item = await self.backend.create_news(payload)

        logger.info(f"Created news {item.id} ({item.status.value})")
        self.feed.prepend(item)
        self.poller.start(item.id)
        return item

    async def delete_news(self, news_id: str) -> None:
        """
        Delete an article and drop it from the feed.

        Raises:
            BackendError: the backend refused the deletion
        """
        await self.backend.delete_news(news_id)

        self.feed.remove(news_id)
        session = self.poller.session
        if session is not None and session.item_id == news_id:
            self.poller.cancel()
        logger.info(f"Deleted news {news_id}")

    def close(self) -> None:
        self.poller.cancel()

    def _apply_status(self, item: NewsItem) -> None:
        if not self.feed.results.update(item.id, lambda current: patch_item(current, item)):
            logger.debug(f"Polled item {item.id} is no longer in the feed")
