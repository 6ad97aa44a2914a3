"""
MCP Tool - search_news

Full-text search over news articles.
"""

from fastmcp import FastMCP

from news_admin.services import get_search_service

router = FastMCP("search_news")


@router.tool()
async def search_news(query: str) -> dict:
    """
    Search news articles by keywords.

    Starts a fresh search: the first page replaces any earlier results.
    Use load_more_results to fetch the following pages.

    Args:
        query: Space-separated keywords

    Returns:
        First page of matching articles with paging state
    """
    service = get_search_service()

    if not query.strip():
        service.close()
        return {"error": "Query is empty"}

    await service.submit(query)

    return {"query": service.query, **service.results.snapshot()}
