"""
MCP Tool - load_more_results

Next page of the current search.
"""

from fastmcp import FastMCP

from news_admin.services import get_search_service

router = FastMCP("load_more_results")


@router.tool()
async def load_more_results() -> dict:
    """
    Append the next page of the current search results.

    Duplicates of articles already shown are skipped. Nothing is fetched
    when no search is active or the last page came back empty.

    Returns:
        All results loaded so far with paging state
    """
    service = get_search_service()
    loaded = await service.load_more()

    return {"query": service.query, "loaded": loaded, **service.results.snapshot()}
