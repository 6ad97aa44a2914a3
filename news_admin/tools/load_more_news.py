"""
MCP Tool - load_more_news

Next page of the news feed.
"""

from fastmcp import FastMCP

from news_admin.services import get_feed_service

router = FastMCP("load_more_news")


@router.tool()
async def load_more_news() -> dict:
    """
    Append the next page of the news feed.

    Returns:
        All feed items loaded so far with paging state
    """
    service = get_feed_service()
    loaded = await service.load_more()

    return {"loaded": loaded, **service.feed.snapshot()}
