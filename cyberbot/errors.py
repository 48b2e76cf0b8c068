"""Exception hierarchy shared by the chatbot components."""

from __future__ import annotations


class ChatbotError(Exception):
    """Base class for every error raised by the chatbot."""


class ValidationError(ChatbotError, ValueError):
    """Invalid user-supplied value such as a name, topic or favorite."""


class PersistenceError(ChatbotError, OSError):
    """The memory file could not be read or written."""


class ConversationError(ChatbotError):
    """Unexpected failure while processing a single conversation turn."""


class FatalError(ChatbotError):
    """Startup wiring failed; the process cannot continue."""


__all__ = [
    "ChatbotError",
    "ConversationError",
    "FatalError",
    "PersistenceError",
    "ValidationError",
]
