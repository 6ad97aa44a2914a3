"""
MCP Tool - add_publisher

Register a news publisher.
"""

from typing import Optional

from fastmcp import FastMCP
from pydantic import ValidationError

from news_admin.client.errors import BackendError
from news_admin.services import get_publisher_service
from news_admin.services.messages import ADD_PUBLISHER, error_response, validation_message

router = FastMCP("add_publisher")


@router.tool()
async def add_publisher(
    name: str,
    domain: str,
    description: Optional[str] = None,
) -> dict:
    """
    Register a publisher so its articles can be added.

    Args:
        name: Display name
        domain: Publisher domain, e.g. example.com
        description: Optional description

    Returns:
        The refreshed publisher list, or a user-facing error message
    """
    service = get_publisher_service()

    try:
        created = await service.add_publisher(name, domain, description)
    except ValidationError as e:
        return {"error": validation_message(e)}
    except BackendError as e:
        return error_response(ADD_PUBLISHER, e)

    return {
        "message": "Publisher added successfully!",
        "publisher": created.model_dump(mode="json") if created else None,
        **service.publishers.snapshot(),
    }
