"""
Tests for the MCP Server and Configuration
"""

import json
import logging
import pytest
from fastmcp import Client

from news_admin.config import JsonFormatter, Settings, configure_logging
from news_admin.server import create_app


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SUGGESTION_DEBOUNCE_MS", raising=False)
        monkeypatch.delenv("POLL_MAX_ATTEMPTS", raising=False)

        settings = Settings()

        assert settings.sync.debounce_ms == 100
        assert settings.sync.poll_max_attempts == 12
        assert settings.sync.feed_scroll_threshold == 300

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("NEWS_API_BASE_URL", "http://news.internal/api/v1")
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "2.5")

        settings = Settings()

        assert settings.backend.base_url == "http://news.internal/api/v1"
        assert settings.sync.poll_interval_seconds == 2.5

    def test_json_log_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        configure_logging(Settings())

        record = logging.LogRecord("news_admin.test", logging.INFO, __file__, 1, "polled %s", ("n1",), None)
        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "polled n1"
        assert payload["level"] == "INFO"
        handlers = logging.getLogger().handlers
        assert any(isinstance(h.formatter, JsonFormatter) for h in handlers)


class TestServer:
    """Tests for tool registration."""

    @pytest.mark.asyncio
    async def test_all_tools_registered(self):
        app = create_app()

        async with Client(app) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == {
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
        }
