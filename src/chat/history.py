"""Submitted-query history with shell-style cursor recall."""

from enum import Enum


class Direction(str, Enum):
    """Recall direction for history navigation."""

    OLDER = "older"
    NEWER = "newer"


class QueryHistory:
    """Append-only list of submitted queries plus a transient recall cursor.

    Attributes:
        entries: Submitted queries, oldest first.
        index: Position of the entry currently recalled, or None.
        saved_draft: Draft the user had typed before recall started.
    """

    def __init__(self) -> None:
        self.entries: list[str] = []
        self.index: int | None = None
        self.saved_draft: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def recalling(self) -> bool:
        return self.index is not None

    def add(self, query: str) -> bool:
        """Append a query unless it repeats the most recent entry.

        Returns:
            True if the query was stored.
        """
        if not query:
            return False
        if self.entries and self.entries[-1] == query:
            return False
        self.entries.append(query)
        return True

    def reset(self) -> None:
        """Leave recall mode."""
        self.index = None
        self.saved_draft = ""

    def older(self, draft: str) -> str | None:
        """Step towards the oldest entry, saturating at index 0.

        Args:
            draft: Current input, remembered when recall starts.

        Returns:
            The entry now under the cursor, or None if history is empty.
        """
        if not self.entries:
            return None
        if self.index is None:
            self.saved_draft = draft
            self.index = len(self.entries) - 1
        elif self.index > 0:
            self.index -= 1
        return self.entries[self.index]

    def newer(self) -> str | None:
        """Step towards the newest entry.

        Stepping past the newest entry ends recall and hands back the draft
        saved when recall started.

        Returns:
            Text for the input, or None when no recall is in progress.
        """
        if self.index is None:
            return None
        if self.index < len(self.entries) - 1:
            self.index += 1
            return self.entries[self.index]
        draft = self.saved_draft
        self.reset()
        return draft

    def select(self, index: int) -> str | None:
        """Jump straight to an entry, e.g. from the history panel.

        Returns:
            The selected entry, or None if ``index`` is out of range.
        """
        if index < 0 or index >= len(self.entries):
            return None
        self.index = index
        self.saved_draft = ""
        return self.entries[index]

    def most_recent_first(self) -> list[tuple[int, str]]:
        """Entries newest first, each paired with its index for select()."""
        return [(i, self.entries[i]) for i in range(len(self.entries) - 1, -1, -1)]
