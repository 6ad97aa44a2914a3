"""
Client Module - Backend Access

Async REST client and error types for the news aggregation backend.
"""

from news_admin.client.backend import NewsBackend
from news_admin.client.errors import BackendError, BackendUnavailable, MalformedResponse

__all__ = [
    "NewsBackend",
    "BackendError",
    "BackendUnavailable",
    "MalformedResponse",
]
