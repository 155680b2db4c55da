"""Command-line entry point for the NCAA chat front-end.

Serves the FastAPI host with the NiceGUI chat page mounted at ``/``.
Settings come from the environment, with ``.env`` loaded first.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Mount the chat page on the FastAPI app and serve both with uvicorn."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import PAGE_TITLE, chat_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title=PAGE_TITLE,
        favicon="🏀",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "ncaa-chat-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Serving {PAGE_TITLE} chat on http://{host}:{port}/")

    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
