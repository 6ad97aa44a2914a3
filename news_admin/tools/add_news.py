"""
MCP Tool - add_news

Submit an article URL for ingestion.
"""

from fastmcp import FastMCP
from pydantic import ValidationError

from news_admin.client.errors import BackendError
from news_admin.services import get_feed_service
from news_admin.services.messages import ADD_NEWS, error_response, validation_message

router = FastMCP("add_news")


@router.tool()
async def add_news(url: str, category: str) -> dict:
    """
    Add a news article by URL.

    The article is processed asynchronously by the backend. It shows up
    first in the feed with status "added", and its status is polled in the
    background for about a minute.

    Args:
        url: Article URL (http or https)
        category: "military" or "finance"

    Returns:
        The created article, or a user-facing error message
    """
    service = get_feed_service()

    try:
        item = await service.add_news(url, category)
    except ValidationError as e:
        return {"error": validation_message(e)}
    except BackendError as e:
        return error_response(ADD_NEWS, e)

    return {
        "message": "News article added successfully!",
        "news": item.model_dump(mode="json"),
        "polling": service.poller.active,
    }
