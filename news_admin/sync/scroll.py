"""
Sync - Scroll Trigger

Requests the next page when the viewport nears the end of the list.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from news_admin.sync.results import PaginatedFetcher

logger = logging.getLogger(__name__)


@dataclass
class ScrollPosition:
    """Scroll geometry of a container (or the window)."""
    scroll_top: float
    scroll_height: float
    client_height: float

    @property
    def distance_to_bottom(self) -> float:
        return self.scroll_height - self.scroll_top - self.client_height


class ScrollTrigger:
    """Fires continuation fetches on a PaginatedFetcher from scroll events."""

    def __init__(
        self,
        fetcher: PaginatedFetcher,
        threshold: float = 100,
        respect_total_pages: bool = False,
    ):
        self.fetcher = fetcher
        self.threshold = threshold
        # Listing endpoints report total_pages; stop once the last one is loaded
        self.respect_total_pages = respect_total_pages

    @property
    def ready(self) -> bool:
        """Every guard but the distance check holds."""
        return self.fetcher.can_load_more and not self.at_last_page()

    def should_fire(self, position: ScrollPosition) -> bool:
        return position.distance_to_bottom <= self.threshold and self.ready

    def on_scroll(self, position: ScrollPosition) -> Optional[asyncio.Task]:
        """
        Handle one scroll event.

        Returns:
            The continuation fetch task, or None if nothing was requested
        """
        if not self.should_fire(position):
            return None
        logger.debug(f"Near bottom, requesting page {self.fetcher.current_page + 1}")
        return self.fetcher.schedule_next()

    def at_last_page(self) -> bool:
        pagination = self.fetcher.pagination
        if not self.respect_total_pages or pagination is None:
            return False
        return self.fetcher.current_page >= pagination.total_pages
