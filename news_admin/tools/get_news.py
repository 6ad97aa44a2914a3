"""
MCP Tool - get_news

Retrieve one article by ID.
"""

from fastmcp import FastMCP

from news_admin.client.errors import BackendError
from news_admin.services import get_feed_service

router = FastMCP("get_news")


@router.tool()
async def get_news(news_id: str) -> dict:
    """
    Get a news article with its content and processing status.

    Args:
        news_id: Article ID

    Returns:
        Article fields, or an error if it does not exist
    """
    service = get_feed_service()

    try:
        item = await service.get_news(news_id)
    except BackendError as e:
        return {"error": f"Request failed ({e.status_code}): {e.reason}", "status_code": e.status_code}

    if not item:
        return {"error": f"News {news_id} not found"}

    return item.model_dump(mode="json")
