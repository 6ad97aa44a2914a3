"""
News Admin - Configuration

Pydantic Settings for all configuration via environment variables.
"""

import json
import logging
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal


class BackendSettings(BaseSettings):
    """News aggregation backend configuration."""
    base_url: str = Field(
        "http://localhost:40000/api/v1", alias="NEWS_API_BASE_URL"
    )
    timeout_ms: int = Field(30000, alias="NEWS_API_TIMEOUT_MS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class SyncSettings(BaseSettings):
    """Timing and paging of the client-side synchronization layer."""
    debounce_ms: int = Field(100, alias="SUGGESTION_DEBOUNCE_MS")
    search_page_size: int = Field(30, ge=1, alias="SEARCH_PAGE_SIZE")
    feed_page_size: int = Field(30, ge=1, alias="FEED_PAGE_SIZE")
    publisher_page_size: int = Field(30, ge=1, alias="PUBLISHER_PAGE_SIZE")
    scroll_threshold: int = Field(100, alias="SCROLL_THRESHOLD")
    feed_scroll_threshold: int = Field(300, alias="FEED_SCROLL_THRESHOLD")
    poll_interval_seconds: float = Field(5.0, alias="POLL_INTERVAL_SECONDS")
    poll_max_attempts: int = Field(12, ge=1, alias="POLL_MAX_ATTEMPTS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["sse", "stdio"] = Field("sse", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )
    format: Literal["json", "text"] = Field("text", alias="LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    backend: BackendSettings = Field(default_factory=BackendSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings=None) -> None:
    """Configure the root logger from LOG_LEVEL / LOG_FORMAT."""
    settings = settings or get_settings()

    handler = logging.StreamHandler()
    if settings.log.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logging.basicConfig(level=settings.log.level, handlers=[handler], force=True)
