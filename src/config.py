"""Front-end configuration with environment variable loading.

Pydantic-based configuration for the chat page and its Query Service client.
Feature flags decide which optional controls the page shows.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AppConfig(BaseModel):
    """Configuration for the chat front-end.

    Attributes:
        query_service_url: Base URL of the Query Service backend.
        chat_path: Endpoint answering natural-language queries.
        process_queries_path: Endpoint running the bulk query processing.
        request_timeout: HTTP timeout in seconds for backend calls.
        tick_interval: Period in seconds of the elapsed-time ticker.
        show_process_queries_button: Show the bulk "Process Queries" action.
        enable_chat_history_panel: Show the query history panel.
            Keyboard history navigation remains enabled regardless.
    """

    model_config = ConfigDict(validate_default=True)

    query_service_url: str = Field(
        default_factory=lambda: os.getenv("QUERY_SERVICE_URL", "http://localhost:8000"),
        description="Query Service base URL",
    )
    chat_path: str = Field(
        default_factory=lambda: os.getenv("CHAT_PATH", "/api/chat"),
        description="Chat endpoint path",
    )
    process_queries_path: str = Field(
        default_factory=lambda: os.getenv("PROCESS_QUERIES_PATH", "/api/queries/process"),
        description="Bulk processing endpoint path",
    )
    request_timeout: float = Field(
        default_factory=lambda: os.getenv("REQUEST_TIMEOUT", "120.0"),
        gt=0.0,
        description="HTTP timeout in seconds",
    )
    tick_interval: float = Field(
        default_factory=lambda: os.getenv("TICK_INTERVAL", "0.1"),
        gt=0.0,
        description="Elapsed-time ticker period in seconds",
    )
    show_process_queries_button: bool = Field(
        default_factory=lambda: os.getenv("SHOW_PROCESS_QUERIES_BUTTON", "false"),
        description="Show the Process Queries button",
    )
    enable_chat_history_panel: bool = Field(
        default_factory=lambda: os.getenv("ENABLE_CHAT_HISTORY_PANEL", "true"),
        description="Show the query history panel",
    )

    @field_validator("query_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoint paths join cleanly."""
        v = v.strip()
        if not v:
            raise ValueError("Query Service URL required. Set QUERY_SERVICE_URL in .env")
        return v.rstrip("/")

    @field_validator("chat_path", "process_queries_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"


def get_app_config() -> AppConfig:
    """Create front-end configuration from environment.

    Returns:
        Configured AppConfig instance.

    Raises:
        ValueError: If an environment value fails validation.
    """
    return AppConfig()
