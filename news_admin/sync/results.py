"""
Sync - Paginated Result Fetcher

Incremental page loading into an ordered, duplicate-free result set.

A fresh fetch replaces the result set; a continuation fetch appends only
items whose ids are not already present. Every request takes a sequence
number, and a completion is applied only if no newer request has been
issued since, so a slow page can never overwrite a newer query.

Local edits (``prepend``/``remove``) made while a request is in flight are
replayed on top of its response once it applies.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from news_admin.client.errors import BackendError
from news_admin.schemas.search import PageDescriptor

logger = logging.getLogger(__name__)


class ResultSet:
    """
    Ordered map of items keyed by ``item.id``.

    Iteration order is display order and no id appears twice.
    """

    def __init__(self, items: Iterable[Any] = ()):
        self._items: Dict[str, Any] = {}
        self.extend(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def get(self, item_id: str) -> Optional[Any]:
        return self._items.get(item_id)

    @property
    def ids(self) -> List[str]:
        return list(self._items)

    def to_list(self) -> List[Any]:
        return list(self._items.values())

    def clear(self) -> None:
        self._items = {}

    def replace(self, items: Iterable[Any]) -> None:
        self._items = {}
        self.extend(items)

    def extend(self, items: Iterable[Any]) -> int:
        """Append items with unseen ids, in order. Returns how many were added."""
        added = 0
        for item in items:
            if not item.id or item.id in self._items:
                continue
            self._items[item.id] = item
            added += 1
        return added

    def prepend(self, item: Any) -> None:
        """Put ``item`` first, dropping any older entry with the same id."""
        items = {item.id: item}
        for item_id, existing in self._items.items():
            if item_id != item.id:
                items[item_id] = existing
        self._items = items

    def update(self, item_id: str, patch: Callable[[Any], Any]) -> bool:
        """Replace the entry for ``item_id`` in place with ``patch(entry)``."""
        if item_id not in self._items:
            return False
        self._items[item_id] = patch(self._items[item_id])
        return True

    def remove(self, item_id: str) -> Optional[Any]:
        return self._items.pop(item_id, None)


# (tokens, page) -> envelope with `.data` and `.pagination`
PageLoader = Callable[[List[str], PageDescriptor], Awaitable[Any]]


class PaginatedFetcher:
    """
    Loads pages of results for one logical stream (a screen's list).

    State:
        results: the ResultSet being displayed
        pagination: metadata from the last applied response, if any
        has_more: False once a fetched page comes back empty
        loading / loading_more: busy flags for fresh and continuation fetches
        current_page: last page that completed successfully
        page_loaded: whether any page of the current stream has completed
    """

    def __init__(
        self,
        loader: PageLoader,
        page_size: int,
        blank_clears: bool = False,
    ):
        self.loader = loader
        self.page_size = page_size
        self.blank_clears = blank_clears

        self.results = ResultSet()
        self.pagination = None
        self.has_more = True
        self.loading = False
        self.loading_more = False
        self.current_page = 1
        self.page_loaded = False
        self.tokens: List[str] = []

        self._seq = 0
        self._tasks: Set[asyncio.Task] = set()
        self._edits: List[Tuple[str, Any]] = []

    @property
    def busy(self) -> bool:
        return self.loading or self.loading_more

    @property
    def can_load_more(self) -> bool:
        """Whether a continuation fetch may start now."""
        return (
            not self.busy
            and self.page_loaded
            and self.has_more
            and len(self.results) > 0
        )

    def prepend(self, item: Any) -> None:
        """Show ``item`` first, keeping it there through the request in flight."""
        self.results.prepend(item)
        if self.busy:
            self._edits.append(("prepend", item))

    def remove(self, item_id: str) -> Optional[Any]:
        """Drop ``item_id``, keeping it out of the response in flight."""
        removed = self.results.remove(item_id)
        if self.busy:
            self._edits.append(("remove", item_id))
        return removed

    async def fetch(self, tokens: List[str], page: int = 1, append: bool = False) -> bool:
        """
        Fetch one page and merge or replace the result set.

        Returns:
            True if the response was applied
        """
        seq = self._begin(tokens, page, append)
        if seq is None:
            return False
        return await self._run(seq, tokens, page, append)

    def schedule(self, tokens: List[str], page: int = 1, append: bool = False) -> Optional[asyncio.Task]:
        """
        Like ``fetch`` but returns a task. Busy flags are set before this
        returns, so a second trigger in the same loop iteration sees them.
        """
        seq = self._begin(tokens, page, append)
        if seq is None:
            return None
        task = asyncio.ensure_future(self._run(seq, tokens, page, append))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def fetch_next(self) -> bool:
        """Continuation fetch of the page after the last completed one."""
        return await self.fetch(self.tokens, self.current_page + 1, append=True)

    def schedule_next(self) -> Optional[asyncio.Task]:
        return self.schedule(self.tokens, self.current_page + 1, append=True)

    def snapshot(self) -> dict:
        """JSON-ready view of the current state."""
        return {
            "items": [item.model_dump(mode="json") for item in self.results],
            "count": len(self.results),
            "page": self.current_page,
            "has_more": self.has_more,
            "pagination": self.pagination.model_dump() if self.pagination else None,
        }

    def reset(self) -> None:
        """Forget everything and ignore any request still in flight."""
        self._seq += 1
        self.results.clear()
        self.pagination = None
        self.has_more = True
        self.loading = False
        self.loading_more = False
        self.current_page = 1
        self.page_loaded = False
        self.tokens = []
        self._edits = []

    def _begin(self, tokens: List[str], page: int, append: bool) -> Optional[int]:
        if self.blank_clears and not tokens:
            self.reset()
            return None

        self._seq += 1
        # A request issued now already sees earlier edits on the backend
        self._edits = []

        if append:
            self.loading_more = True
        else:
            self.tokens = list(tokens)
            self.results.clear()
            self.pagination = None
            self.has_more = True
            self.page_loaded = False
            self.loading = True
            self.loading_more = False

        return self._seq

    def _replay_edits(self) -> None:
        for action, value in self._edits:
            if action == "prepend":
                self.results.prepend(value)
            else:
                self.results.remove(value)
        self._edits = []

    async def _run(self, seq: int, tokens: List[str], page: int, append: bool) -> bool:
        descriptor = PageDescriptor(page=page, size=self.page_size)

        try:
            response = await self.loader(list(tokens), descriptor)
        except BackendError as e:
            if seq != self._seq:
                logger.debug(f"Ignoring stale failure for page {page}: {e}")
                return False
            logger.warning(f"Failed to fetch page {page} (append={append}): {e}")
            if not append:
                self.results.clear()
                self.pagination = None
                self.has_more = False
            self._edits = []
            self.loading = False
            self.loading_more = False
            return False

        if seq != self._seq:
            logger.debug(f"Dropping stale response for page {page}")
            return False

        new_items = list(response.data or [])
        self.has_more = len(new_items) > 0

        if append:
            added = self.results.extend(new_items)
            if added < len(new_items):
                logger.debug(f"Skipped {len(new_items) - added} duplicate items on page {page}")
            if response.pagination is not None:
                self.pagination = response.pagination
        else:
            self.results.replace(new_items)
            self.pagination = response.pagination
        self._replay_edits()

        self.current_page = page
        self.page_loaded = True
        self.loading = False
        self.loading_more = False
        return True
