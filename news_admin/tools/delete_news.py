"""
MCP Tool - delete_news

Delete an article.
"""

from fastmcp import FastMCP

from news_admin.client.errors import BackendError
from news_admin.services import get_feed_service
from news_admin.services.messages import DELETE_NEWS, error_response

router = FastMCP("delete_news")


@router.tool()
async def delete_news(news_id: str) -> dict:
    """
    Delete a news article. This cannot be undone.

    Args:
        news_id: Article ID

    Returns:
        Confirmation, or a user-facing error message
    """
    service = get_feed_service()

    try:
        await service.delete_news(news_id)
    except BackendError as e:
        return error_response(DELETE_NEWS, e)

    return {"message": "News article deleted successfully!", "news_id": news_id}
