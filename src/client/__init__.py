"""HTTP client for the external Query Service.

Responsibilities:
    - POST natural-language queries to the chat endpoint
    - Trigger bulk query processing
    - Convert transport and HTTP failures into QueryServiceError

Uses httpx with async requests. Keeps the UI free of networking details.
"""

from src.client.query_service import QueryService, QueryServiceError

__all__ = ["QueryService", "QueryServiceError"]
