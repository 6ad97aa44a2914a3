"""
Sync Module - Client-side Data Synchronization

Debounced suggestions, paginated result loading, scroll-driven
continuation, and bounded status polling:
keystrokes → Debouncer → SuggestionFetcher;
commit / scroll → PaginatedFetcher; creation → StatusPoller.
"""

from news_admin.sync.debounce import Debouncer
from news_admin.sync.suggestions import SuggestionFetcher
from news_admin.sync.results import ResultSet, PaginatedFetcher
from news_admin.sync.scroll import ScrollPosition, ScrollTrigger
from news_admin.sync.polling import PollState, PollSession, StatusPoller

__all__ = [
    "Debouncer",
    "SuggestionFetcher",
    "ResultSet",
    "PaginatedFetcher",
    "ScrollPosition",
    "ScrollTrigger",
    "PollState",
    "PollSession",
    "StatusPoller",
]
