"""Conversation logic for the chat page.

Responsibilities:
    - Message list and input draft management
    - Query submission with loading and elapsed-time state
    - Command history with arrow-key recall and a history panel
    - Bulk query processing reports

Independent of NiceGUI. Views subscribe to change notifications.
"""

from src.chat.controller import Change, ConversationController
from src.chat.history import Direction, QueryHistory

__all__ = ["Change", "ConversationController", "Direction", "QueryHistory"]
