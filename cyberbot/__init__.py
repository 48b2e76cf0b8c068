"""Console chatbot for cybersecurity awareness.

The package wires together

* a static knowledge base of topic responses with random variants,
* a flat-file memory store for keyword counts, interest and favorites,
* a conversation engine that tags sentiment, extracts keywords and composes
  contextual replies, and
* a colored console front end with typing effect, ASCII art and audio greeting.
"""

from .engine import ConversationEngine, contextual_prefix, detect_sentiment
from .errors import (
    ChatbotError,
    ConversationError,
    FatalError,
    PersistenceError,
    ValidationError,
)
from .knowledge import KnowledgeBase, extract_keywords, tokenize
from .runtime import ChatbotRuntime, main as runtime_main
from .schemas import CommandKind, ResponseEntry, TurnResult, TurnState, UserProfile
from .storage import MemoryStore

__all__ = [
    "ChatbotError",
    "ChatbotRuntime",
    "CommandKind",
    "ConversationEngine",
    "ConversationError",
    "FatalError",
    "KnowledgeBase",
    "MemoryStore",
    "PersistenceError",
    "ResponseEntry",
    "TurnResult",
    "TurnState",
    "UserProfile",
    "ValidationError",
    "contextual_prefix",
    "detect_sentiment",
    "extract_keywords",
    "runtime_main",
    "tokenize",
]
