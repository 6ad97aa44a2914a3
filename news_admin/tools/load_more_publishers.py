"""
MCP Tool - load_more_publishers

Next page of the publisher list.
"""

from fastmcp import FastMCP

from news_admin.services import get_publisher_service

router = FastMCP("load_more_publishers")


@router.tool()
async def load_more_publishers() -> dict:
    """
    Append the next page of publishers.

    Returns:
        All publishers loaded so far with paging state
    """
    service = get_publisher_service()
    loaded = await service.load_more()

    return {"loaded": loaded, **service.publishers.snapshot()}
