"""
MCP Tool - suggest_keywords

Live keyword suggestions for a partial query.
"""

from fastmcp import FastMCP

from news_admin.services import get_search_service

router = FastMCP("suggest_keywords")


@router.tool()
async def suggest_keywords(text: str) -> dict:
    """
    Suggest search terms for partially typed text.

    Args:
        text: Text typed so far

    Returns:
        Suggested terms (empty if the lookup failed)
    """
    service = get_search_service()
    suggestions = await service.suggest(text)

    return {"text": text, "suggestions": suggestions, "count": len(suggestions)}
