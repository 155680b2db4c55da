"""FastAPI host for the chat front-end.

Endpoints:
    - GET /health: Service health status
    - /: NiceGUI chat page (mounted in src.main)
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
