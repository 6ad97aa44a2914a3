"""
Services - Publisher Service

Paginated publisher listing and registration.
"""

import asyncio
from typing import List, Optional

from news_admin.config import get_settings
from news_admin.client.backend import NewsBackend
from news_admin.schemas.publisher import Publisher, PublisherCreate, PublisherPage
from news_admin.schemas.search import PageDescriptor
from news_admin.sync.results import PaginatedFetcher
from news_admin.sync.scroll import ScrollPosition, ScrollTrigger


class PublisherService:
    """State of one publisher list screen."""

    def __init__(self, settings=None, backend: Optional[NewsBackend] = None):
        self.settings = settings or get_settings()
        self.backend = backend or NewsBackend(self.settings)
        sync = self.settings.sync

        self.publishers = PaginatedFetcher(
            self._load_page, page_size=sync.publisher_page_size
        )
        self.scroll = ScrollTrigger(
            self.publishers,
            threshold=sync.scroll_threshold,
            respect_total_pages=True,
        )

    async def _load_page(self, tokens: List[str], page: PageDescriptor) -> PublisherPage:
        return await self.backend.list_publishers(page.page, page.size)

    @property
    def items(self) -> List[Publisher]:
        return self.publishers.results.to_list()

    async def refresh(self) -> bool:
        return await self.publishers.fetch([], page=1, append=False)

    def on_scroll(self, position: ScrollPosition) -> Optional[asyncio.Task]:
        return self.scroll.on_scroll(position)

    async def load_more(self) -> bool:
        if not self.scroll.ready:
            return False
        return await self.publishers.fetch_next()

    async def get_publisher(self, publisher_id: str) -> Optional[Publisher]:
        return await self.backend.get_publisher(publisher_id)

    async def add_publisher(
        self,
        name: str,
        domain: str,
        description: Optional[str] = None,
    ) -> Optional[Publisher]:
        """
        Register a publisher, then reload the list from page 1.

        Raises:
            pydantic.ValidationError: missing name or malformed domain
            BackendError: the backend rejected the registration
        """
        payload = PublisherCreate(name=name, domain=domain, description=description)
        created = await self.backend.create_publisher(payload)
        await self.refresh()
        return created
