"""
Tools Module - MCP Tool Implementations

All 12 MCP tools for news administration.
"""

from news_admin.tools import search_news
from news_admin.tools import suggest_keywords
from news_admin.tools import load_more_results
from news_admin.tools import list_news
from news_admin.tools import load_more_news
from news_admin.tools import get_news
from news_admin.tools import add_news
from news_admin.tools import delete_news
from news_admin.tools import list_publishers
from news_admin.tools import load_more_publishers
from news_admin.tools import get_publisher
from news_admin.tools import add_publisher

__all__ = [
    "search_news",
    "suggest_keywords",
    "load_more_results",
    "list_news",
    "load_more_news",
    "get_news",
    "add_news",
    "delete_news",
    "list_publishers",
    "load_more_publishers",
    "get_publisher",
    "add_publisher",
]
