"""httpx client for the NCAA basketball Query Service.

Every failure (HTTP status, transport, undecodable or malformed body) is
raised as QueryServiceError so callers handle a single exception type.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.config import AppConfig, get_app_config
from src.models.schemas import ChatRequest, ChatResponse, ProcessQueriesResponse

logger = logging.getLogger(__name__)


class QueryServiceError(Exception):
    """Raised when a Query Service call fails.

    Attributes:
        server_message: Human-readable message supplied by the backend, if any.
        status_code: HTTP status of the failed response, if one was received.
    """

    def __init__(
        self,
        message: str,
        server_message: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.server_message = server_message
        self.status_code = status_code

    def describe(self, fallback: str = "Unknown error") -> str:
        """Best available explanation: server message, then transport message."""
        return self.server_message or str(self) or fallback


def extract_server_message(response: httpx.Response) -> str | None:
    """Pull an error message out of a JSON error body.

    Looks at ``message``, then a nested ``error.message``, then a string
    ``detail`` as produced by FastAPI backends.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    if isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    if isinstance(body.get("detail"), str) and body["detail"]:
        return body["detail"]
    return None


class QueryService:
    """Client for the chat and bulk-processing endpoints."""

    def __init__(
        self,
        config: AppConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional front-end configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used to route requests
                       in-process (tests, ASGI apps).
        """
        self._config = config or get_app_config()
        self._transport = transport

    async def send_query(self, query: str) -> ChatResponse:
        """Ask the backend a natural-language question.

        Args:
            query: The user's question.

        Returns:
            Parsed ChatResponse.

        Raises:
            QueryServiceError: If the request fails or the body is malformed.
        """
        payload = ChatRequest(query=query).model_dump()
        body = await self._post(self._config.chat_path, payload)
        try:
            return ChatResponse.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Malformed chat response: {e}")
            raise QueryServiceError(f"Malformed response from Query Service: {e}") from e

    async def process_queries(self) -> ProcessQueriesResponse:
        """Run the backend's bulk query processing.

        Returns:
            Parsed ProcessQueriesResponse.

        Raises:
            QueryServiceError: If the request fails or the body is malformed.
        """
        body = await self._post(self._config.process_queries_path, None)
        try:
            return ProcessQueriesResponse.model_validate(body or {})
        except ValidationError as e:
            logger.warning(f"Malformed processing summary: {e}")
            raise QueryServiceError(f"Malformed response from Query Service: {e}") from e

    async def _post(self, path: str, payload: dict[str, Any] | None) -> Any:
        async with httpx.AsyncClient(
            base_url=self._config.query_service_url,
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(path, json=payload)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                code = e.response.status_code
                logger.warning(f"POST {path} failed with HTTP {code}")
                raise QueryServiceError(
                    f"HTTP {code} {e.response.reason_phrase}".strip(),
                    server_message=extract_server_message(e.response),
                    status_code=code,
                ) from e
            except httpx.RequestError as e:
                logger.warning(f"POST {path} could not connect: {e}")
                raise QueryServiceError(f"Connection failed: {e}") from e
            except ValueError as e:
                logger.warning(f"POST {path} returned invalid JSON")
                raise QueryServiceError("Invalid JSON in Query Service response") from e
