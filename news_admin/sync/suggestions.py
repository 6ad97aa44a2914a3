"""
Sync - Suggestion Fetcher

Advisory keyword suggestions. Failures are logged and resolve to an
empty list; responses superseded by a newer request are dropped.
"""

import logging
from typing import List

from news_admin.client.errors import BackendError
from news_admin.schemas.search import tokenize

logger = logging.getLogger(__name__)


class SuggestionFetcher:
    """Fetches live term suggestions for the text being typed."""

    def __init__(self, backend):
        self.backend = backend
        self.suggestions: List[str] = []
        self.loading = False
        self._seq = 0

    async def fetch(self, text: str) -> List[str]:
        """
        Look up suggestions for ``text``.

        Returns:
            The suggestions applied, or an empty list when the lookup failed
            or a newer lookup superseded it
        """
        tokens = tokenize(text)
        if not tokens:
            self.clear()
            return []

        self._seq += 1
        seq = self._seq
        self.loading = True

        try:
            suggestions = await self.backend.suggest(tokens)
        except BackendError as e:
            logger.warning(f"Failed to fetch suggestions for {tokens}: {e}")
            suggestions = []

        if seq != self._seq:
            logger.debug(f"Dropping stale suggestions for {tokens}")
            return []

        self.suggestions = list(suggestions)
        self.loading = False
        return self.suggestions

    def clear(self) -> None:
        """Clear suggestions and ignore any lookup still in flight."""
        self._seq += 1
        self.suggestions = []
        self.loading = False
