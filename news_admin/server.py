"""
News Admin MCP Server - Main Entry Point

FastMCP server with STDIO and SSE transport support.
"""

import argparse
from fastmcp import FastMCP

from news_admin.config import configure_logging, get_settings

# Import tools (registered on per-tool routers)
from news_admin.tools import (
    search_news,
    suggest_keywords,
    load_more_results,
    list_news,
    load_more_news,
    get_news,
    add_news,
    delete_news,
    list_publishers,
    load_more_publishers,
    get_publisher,
    add_publisher,
)

ROUTERS = (
    search_news,
    suggest_keywords,
    load_more_results,
    list_news,
    load_more_news,
    get_news,
    add_news,
    delete_news,
    list_publishers,
    load_more_publishers,
    get_publisher,
    add_publisher,
)


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="news-admin",
        instructions="Search, list, add and delete news articles and publishers",
    )

    # Register all tools
    for module in ROUTERS:
        mcp.mount(module.router)

    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="News Admin MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="Transport protocol (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    transport = args.transport or settings.mcp.transport
    port = args.port or settings.mcp.port

    mcp = create_app()

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.mcp.host, port=port)


if __name__ == "__main__":
    main()
