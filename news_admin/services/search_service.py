"""
Services - Search Service

Command-palette style search: debounced live suggestions, committed
full-text queries, and scroll-driven continuation pages.
"""

import asyncio
import logging
from typing import List, Optional

from news_admin.config import get_settings
from news_admin.client.backend import NewsBackend
from news_admin.schemas.news import NewsPage
from news_admin.schemas.search import PageDescriptor, tokenize
from news_admin.sync.debounce import Debouncer
from news_admin.sync.results import PaginatedFetcher
from news_admin.sync.scroll import ScrollPosition, ScrollTrigger
from news_admin.sync.suggestions import SuggestionFetcher

logger = logging.getLogger(__name__)


class SearchService:
    """State of one search overlay."""

    def __init__(self, settings=None, backend: Optional[NewsBackend] = None):
        self.settings = settings or get_settings()
        self.backend = backend or NewsBackend(self.settings)
        sync = self.settings.sync

        self.query = ""
        self.suggester = SuggestionFetcher(self.backend)
        self.results = PaginatedFetcher(
            self._load_page,
            page_size=sync.search_page_size,
            blank_clears=True,
        )
        self.debouncer = Debouncer(
            sync.debounce_ms / 1000,
            self.suggester.fetch,
            on_clear=self._clear,
        )
        self.scroll = ScrollTrigger(self.results, threshold=sync.scroll_threshold)

    async def _load_page(self, tokens: List[str], page: PageDescriptor) -> NewsPage:
        return await self.backend.search_news(tokens, page.page, page.size)

    @property
    def suggestions(self) -> List[str]:
        return self.suggester.suggestions

    def on_input(self, text: str) -> None:
        """Keystroke in the search box."""
        self.query = text
        self.debouncer.notify(text)

    async def suggest(self, text: str) -> List[str]:
        """Immediate suggestion lookup, bypassing the debounce timer."""
        self.query = text
        self.debouncer.cancel()
        return await self.suggester.fetch(text)

    async def submit(self, query: Optional[str] = None) -> bool:
        """
        Commit the query (Enter). A blank query does nothing.

        Returns:
            True if a first page was loaded
        """
        if query is not None:
            self.query = query
        if not self.query.strip():
            return False
        self.debouncer.cancel()
        return await self.results.fetch(tokenize(self.query), page=1, append=False)

    async def select_suggestion(self, suggestion: str) -> bool:
        return await self.submit(suggestion)

    def on_scroll(self, position: ScrollPosition) -> Optional[asyncio.Task]:
        return self.scroll.on_scroll(position)

    async def load_more(self) -> bool:
        """Continuation fetch under the same guards as the scroll trigger."""
        if not self.scroll.ready:
            return False
        return await self.results.fetch_next()

    def close(self) -> None:
        """Tear down: cancel the debounce timer and reset all state."""
        self.debouncer.cancel()
        self.suggester.clear()
        self.results.reset()
        self.query = ""

    def _clear(self) -> None:
        self.suggester.clear()
        self.results.reset()
