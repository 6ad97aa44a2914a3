"""
Client - News Backend

REST client for the news aggregation backend.
"""

import logging
import httpx
from typing import Any, Dict, List, Optional
from pydantic import ValidationError

from news_admin.config import get_settings
from news_admin.client.errors import BackendError, BackendUnavailable, MalformedResponse
from news_admin.schemas.errors import ErrorEnvelope
from news_admin.schemas.news import (
    NewsCreate,
    NewsEnvelope,
    NewsFilters,
    NewsItem,
    NewsPage,
    SuggestionsEnvelope,
)
from news_admin.schemas.publisher import (
    Publisher,
    PublisherCreate,
    PublisherEnvelope,
    PublisherPage,
)

logger = logging.getLogger(__name__)


class NewsBackend:
    """Async client for the `/news` and `/publishers` endpoints."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.backend.base_url.rstrip("/")
        self.timeout = self.settings.backend.timeout_ms / 1000
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Issue one request and return the decoded JSON body.

        Raises:
            BackendUnavailable: transport failure or too many redirects
            BackendError: non-2xx status, with the structured error body if any
            MalformedResponse: body that cannot be decoded (content encoding or JSON)
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, params=params, json=json)
            except httpx.DecodingError as e:
                raise MalformedResponse(502, "Undecodable response body") from e
            except httpx.RequestError as e:
                raise BackendUnavailable(str(e)) from e

        if response.is_error:
            raise BackendError(
                response.status_code,
                response.reason_phrase,
                self._parse_errors(response),
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(response.status_code, "Malformed response body") from e

    @staticmethod
    def _parse_errors(response: httpx.Response):
        try:
            return ErrorEnvelope.model_validate(response.json()).errors
        except (ValueError, ValidationError):
            # Unparseable error bodies fall through to generic handling
            return []

    @staticmethod
    def _validate(model, body: Any):
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise MalformedResponse(200, f"Unexpected response shape: {e.error_count()} errors") from e

    async def suggest(self, tokens: List[str]) -> List[str]:
        """Live keyword suggestions for the given tokens."""
        body = await self._request(
            "GET", "/news/search/suggestions", params={"keywords": tokens}
        )
        return self._validate(SuggestionsEnvelope, body or {}).data

    async def search_news(self, tokens: List[str], page: int, size: int) -> NewsPage:
        """One page of full-text search results."""
        params = {"keywords": tokens, "page": page, "size": size}
        body = await self._request("GET", "/news/search", params=params)
        return self._validate(NewsPage, body or {})

    async def list_news(
        self,
        filters: Optional[NewsFilters] = None,
        page: int = 1,
        size: int = 30,
    ) -> NewsPage:
        """One page of the news feed, optionally filtered."""
        params = filters.to_params() if filters else {}
        params.update({"page": page, "size": size})
        body = await self._request("GET", "/news", params=params)
        return self._validate(NewsPage, body or {})

    async def get_news(self, news_id: str) -> Optional[NewsItem]:
        """
        Fetch a single article.

        Returns:
            NewsItem or None if not found
        """
        try:
            body = await self._request("GET", f"/news/{news_id}")
        except BackendError as e:
            if e.is_not_found:
                return None
            raise
        return self._validate(NewsEnvelope, body).data

    async def create_news(self, payload: NewsCreate) -> NewsItem:
        """Submit an article URL for ingestion."""
        body = await self._request("POST", "/news", json=payload.model_dump())
        return self._validate(NewsEnvelope, body).data

    async def delete_news(self, news_id: str) -> None:
        await self._request("DELETE", f"/news/{news_id}")

    async def list_publishers(self, page: int = 1, size: int = 30) -> PublisherPage:
        """One page of registered publishers."""
        body = await self._request(
            "GET", "/publishers", params={"page": page, "size": size}
        )
        return self._validate(PublisherPage, body or {})

    async def get_publisher(self, publisher_id: str) -> Optional[Publisher]:
        try:
            body = await self._request("GET", f"/publishers/{publisher_id}")
        except BackendError as e:
            if e.is_not_found:
                return None
            raise
        return self._validate(PublisherEnvelope, body).data

    async def create_publisher(self, payload: PublisherCreate) -> Optional[Publisher]:
        """
        Register a publisher.

        Returns:
            The created Publisher, or None when the backend acknowledges
            without echoing it back
        """
        body = await self._request(
            "POST", "/publishers", json=payload.model_dump(exclude_none=True)
        )
        try:
            return PublisherEnvelope.model_validate(body).data
        except ValidationError:
            logger.debug("Publisher created without a parseable echo")
            return None
