"""
MCP Tool - list_news

News feed listing with date and status filters.
"""

from typing import Optional

from fastmcp import FastMCP
from pydantic import ValidationError

from news_admin.schemas.news import NewsStatus
from news_admin.services import get_feed_service
from news_admin.services.messages import validation_message

router = FastMCP("list_news")


@router.tool()
async def list_news(
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    status: Optional[NewsStatus] = None,
) -> dict:
    """
    List the news feed, newest first.

    Args:
        date_from: Optional first day (YYYY-MM-DD)
        date_to: Optional last day, inclusive (YYYY-MM-DD)
        status: Optional status filter ("added", "synced" or "failed")

    Returns:
        First page of the feed with paging state and active filters
    """
    service = get_feed_service()

    try:
        loaded = await service.apply_filters(date_from, date_to, status)
    except ValidationError as e:
        return {"error": validation_message(e)}

    if not loaded:
        return {"error": "Failed to load news", **service.feed.snapshot()}

    return {
        "filters": service.filters.model_dump(mode="json"),
        **service.feed.snapshot(),
    }
