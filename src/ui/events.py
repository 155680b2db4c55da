"""Browser events relayed to Python: window resizes and input keys."""

import logging
import math
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from src.chat.controller import ConversationController
from src.chat.history import Direction

logger = logging.getLogger(__name__)

ResizeCallback = Callable[[int, int], None]

# Injected once per page; forwards window resizes to the server as a global event.
RESIZE_SCRIPT = """
<script>
window.addEventListener('resize', () => {
    emitEvent('window_resize', {width: window.innerWidth, height: window.innerHeight});
});
</script>
"""

# Runs in the browser on every keydown of the input. Plain Enter submits and
# Shift+Enter types a newline. The arrows are only taken over while
# ``window.historyRecall`` is set, otherwise the caret moves as usual.
INPUT_KEYS_JS = """(e) => {
    if (e.key === 'Enter' && !e.shiftKey && !e.isComposing) {
        e.preventDefault();
        emit('Enter');
    } else if ((e.key === 'ArrowUp' || e.key === 'ArrowDown') && window.historyRecall) {
        e.preventDefault();
        emit(e.key);
    }
}"""

HISTORY_KEYS = {"ArrowUp": Direction.OLDER, "ArrowDown": Direction.NEWER}


def history_recall_script(enabled: bool) -> str:
    """Tell the browser whether the arrow keys belong to history recall."""
    return f"window.historyRecall = {'true' if enabled else 'false'};"


async def dispatch_input_key(controller: ConversationController, key: str) -> None:
    """Apply a key forwarded by INPUT_KEYS_JS to the conversation."""
    if key == "Enter":
        await controller.submit()
    elif key in HISTORY_KEYS:
        controller.navigate_history(HISTORY_KEYS[key])
    else:
        logger.debug(f"Ignoring input key {key!r}")


DEFAULT_INPUT_MAX_HEIGHT = 200
MIN_INPUT_MAX_HEIGHT = 140


def max_input_height(viewport_height: int | None) -> int:
    """Tallest the input may grow: 30% of the viewport, never below 140px."""
    if not viewport_height:
        return DEFAULT_INPUT_MAX_HEIGHT
    return max(MIN_INPUT_MAX_HEIGHT, math.floor(viewport_height * 0.3))


class WindowResizeEvents:
    """Per-page fan-out of window resize notifications."""

    def __init__(self) -> None:
        self._callbacks: list[ResizeCallback] = []
        self.width: int | None = None
        self.height: int | None = None

    def __len__(self) -> int:
        return len(self._callbacks)

    def publish(self, width: int, height: int) -> None:
        self.width, self.height = width, height
        for callback in list(self._callbacks):
            callback(width, height)

    @contextmanager
    def listening(self, callback: ResizeCallback) -> Iterator[None]:
        """Keep ``callback`` subscribed for the duration of the block."""
        self._callbacks.append(callback)
        try:
            yield
        finally:
            self._callbacks.remove(callback)
            logger.debug("Resize listener released")
