"""
MCP Tool - get_publisher

Retrieve one publisher by ID.
"""

from fastmcp import FastMCP

from news_admin.client.errors import BackendError
from news_admin.services import get_publisher_service

router = FastMCP("get_publisher")


@router.tool()
async def get_publisher(publisher_id: str) -> dict:
    """
    Get a publisher's details.

    Args:
        publisher_id: Publisher ID

    Returns:
        Publisher fields, or an error if it does not exist
    """
    service = get_publisher_service()

    try:
        publisher = await service.get_publisher(publisher_id)
    except BackendError as e:
        return {"error": f"Request failed ({e.status_code}): {e.reason}", "status_code": e.status_code}

    if not publisher:
        return {"error": f"Publisher {publisher_id} not found"}

    return publisher.model_dump(mode="json")
