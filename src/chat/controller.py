"""Conversation state and interaction logic for the chat page.

The controller is UI-agnostic: it mutates plain attributes and notifies
subscribers with a Change value after every mutation. Views re-render
from controller state when notified, so nothing depends on a framework's
own dirty-checking.

Concurrency model:
    - Runs on the single asyncio event loop serving the page.
    - At most one query is in flight; ``loading`` is the only admission rule.
    - The elapsed-time ticker is an asyncio.Task owned by an async context
      manager, so it is stopped on every exit path before the reply is added.
"""

import asyncio
import logging
import math
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from enum import Enum

from src.chat.formatting import (
    WELCOME_MESSAGE,
    format_process_error,
    format_process_summary,
    format_query_error,
)
from src.chat.history import Direction, QueryHistory
from src.client.query_service import QueryService, QueryServiceError
from src.config import AppConfig, get_app_config
from src.models.schemas import ChatMessage

logger = logging.getLogger(__name__)


class Change(str, Enum):
    """Kinds of state change reported to subscribers."""

    MESSAGES = "messages"
    DRAFT = "draft"
    LOADING = "loading"
    ELAPSED = "elapsed"
    HISTORY = "history"
    PANEL = "panel"
    PROCESSING = "processing"
    FOCUS = "focus"


Listener = Callable[[Change], None]


class ConversationController:
    """Owns the message list, input draft, loading state and query history."""

    def __init__(
        self,
        service: QueryService,
        config: AppConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            service: Client used to reach the Query Service.
            config: Optional front-end configuration.
                    Loads from environment if not provided.
            clock: Monotonic clock in seconds, replaceable in tests.
        """
        self._service = service
        self._config = config or get_app_config()
        self._clock = clock
        self._listeners: list[Listener] = []
        self._ticker: asyncio.Task[None] | None = None

        self.messages: list[ChatMessage] = [ChatMessage(text=WELCOME_MESSAGE, is_user=False)]
        self.draft: str = ""
        self.loading: bool = False
        self.elapsed_seconds: int = 0
        self.processing_queries: bool = False
        self.history = QueryHistory()
        self.show_history_panel: bool = False

    @property
    def history_panel_enabled(self) -> bool:
        return self._config.enable_chat_history_panel

    @property
    def process_queries_enabled(self) -> bool:
        return self._config.show_process_queries_button

    @property
    def can_navigate_history(self) -> bool:
        """Whether the arrow keys recall history instead of moving the caret."""
        return not self.loading and bool(self.history)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, *changes: Change) -> None:
        for change in changes:
            for listener in list(self._listeners):
                listener(change)

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self._emit(Change.MESSAGES)

    def _elapsed_ms(self, started: float) -> int:
        return max(0, int((self._clock() - started) * 1000))

    # === Query submission ===

    async def submit(self) -> None:
        """Send the current draft to the Query Service.

        Does nothing if the trimmed draft is empty or a query is in flight.
        Backend failures become an error message in the conversation.
        """
        query = self.draft.strip()
        if not query or self.loading:
            return

        if self.history.add(query):
            self._emit(Change.HISTORY)
        self.history.reset()
        self._append(ChatMessage(text=query, is_user=True))
        self.draft = ""
        self.loading = True
        self.elapsed_seconds = 0
        started = self._clock()
        self._emit(Change.DRAFT, Change.LOADING)

        logger.info(f"Submitting query ({len(query)} chars)")
        async with self._elapsed_ticker(started):
            try:
                response = await self._service.send_query(query)
            except QueryServiceError as e:
                logger.warning(f"Query failed: {e}")
                reply = ChatMessage(
                    text=format_query_error(e.describe("Unknown error")),
                    is_user=False,
                    time_taken_ms=self._elapsed_ms(started),
                )
            else:
                reply = ChatMessage(
                    text=response.message,
                    is_user=False,
                    response=response,
                    time_taken_ms=self._elapsed_ms(started),
                )

        self._append(reply)
        self.loading = False
        self.elapsed_seconds = 0
        self._emit(Change.LOADING, Change.ELAPSED)

    @asynccontextmanager
    async def _elapsed_ticker(self, started: float) -> AsyncIterator[None]:
        self._stop_ticker()
        self._ticker = asyncio.create_task(self._tick(started))
        try:
            yield
        finally:
            self._stop_ticker()

    async def _tick(self, started: float) -> None:
        while True:
            await asyncio.sleep(self._config.tick_interval)
            if self.loading:
                self.elapsed_seconds = math.floor(self._clock() - started)
                self._emit(Change.ELAPSED)

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    # === Draft and history ===

    def edit_draft(self, text: str) -> None:
        """Apply a manual edit; any active history recall is cancelled first."""
        if self.history.recalling:
            self.history.reset()
        self.draft = text
        self._emit(Change.DRAFT)

    def navigate_history(self, direction: Direction) -> None:
        """Recall an older or newer query into the draft (arrow keys)."""
        if not self.can_navigate_history:
            return

        if direction is Direction.OLDER:
            text = self.history.older(self.draft)
        else:
            text = self.history.newer()
        if text is None:
            return
        self.draft = text
        self._emit(Change.DRAFT)

    def recall_from_panel(self, index: int) -> None:
        """Load a history entry picked from the history panel."""
        text = self.history.select(index)
        if text is None:
            return
        self.draft = text
        self._emit(Change.DRAFT, Change.FOCUS)

    def toggle_history_panel(self) -> None:
        if not self.history_panel_enabled or not self.history:
            return
        self.show_history_panel = not self.show_history_panel
        self._emit(Change.PANEL)

    def close_history_panel(self) -> None:
        if not self.history_panel_enabled or not self.history:
            return
        self.show_history_panel = False
        self._emit(Change.PANEL)

    # === Bulk processing ===

    async def process_queries(self) -> None:
        """Run the backend's bulk query processing and report the outcome."""
        if self.processing_queries:
            return

        self.processing_queries = True
        self._emit(Change.PROCESSING)
        started = self._clock()
        try:
            summary = await self._service.process_queries()
        except QueryServiceError as e:
            logger.warning(f"Query processing failed: {e}")
            reply = ChatMessage(
                text=format_process_error(e.describe("Unknown error occurred")),
                is_user=False,
                time_taken_ms=self._elapsed_ms(started),
            )
        else:
            elapsed_ms = self._elapsed_ms(started)
            reply = ChatMessage(
                text=format_process_summary(summary, elapsed_ms),
                is_user=False,
                time_taken_ms=summary.processing_time_ms or elapsed_ms,
            )
        finally:
            self.processing_queries = False

        self._append(reply)
        self._emit(Change.PROCESSING)

    def close(self) -> None:
        """Tear down: stop the ticker and drop all listeners."""
        self._stop_ticker()
        self._listeners.clear()
