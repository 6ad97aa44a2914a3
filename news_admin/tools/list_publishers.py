"""
MCP Tool - list_publishers

Registered publishers.
"""

from fastmcp import FastMCP

from news_admin.services import get_publisher_service

router = FastMCP("list_publishers")


@router.tool()
async def list_publishers() -> dict:
    """
    List registered news publishers.

    Returns:
        First page of publishers with paging state
    """
    service = get_publisher_service()

    if not await service.refresh():
        return {"error": "Failed to load publishers", **service.publishers.snapshot()}

    return service.publishers.snapshot()
