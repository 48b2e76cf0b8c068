"""Typed data structures used by the cybersecurity awareness chatbot."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple


class CommandKind(str, Enum):
    """Outcome of dispatching one line of user input."""

    EMPTY = "empty"
    EXIT = "exit"
    HELP = "help"
    NAME_QUERY = "name_query"
    INTEREST_QUERY = "interest_query"
    FAVORITES = "favorites"
    INTEREST = "interest"
    TOPIC = "topic"
    NO_MATCH = "no_match"


class TurnState(str, Enum):
    """States of the conversation loop."""

    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    EXITED = "exited"


@dataclass(frozen=True)
class ResponseEntry:
    """A topic and the interchangeable replies the bot may give for it."""

    topic: str
    variants: Tuple[str, ...]

    def __post_init__(self) -> None:
        topic = self.topic.strip().lower()
        if not topic:
            raise ValueError("Topic cannot be empty")
        variants = tuple(text for text in self.variants if text and text.strip())
        if not variants:
            raise ValueError(f"Topic '{topic}' needs at least one non-empty response")
        object.__setattr__(self, "topic", topic)
        object.__setattr__(self, "variants", variants)

    @classmethod
    def build(cls, topic: str, responses: str | Sequence[str]) -> "ResponseEntry":
        if isinstance(responses, str):
            responses = (responses,)
        return cls(topic=topic, variants=tuple(responses))

    def pick(self, rng: random.Random) -> str:
        if len(self.variants) == 1:
            return self.variants[0]
        return rng.choice(self.variants)


@dataclass
class UserProfile:
    """Per-session user state. Only the name is never persisted."""

    name: Optional[str] = None
    current_interest: Optional[str] = None
    keyword_counts: Dict[str, int] = field(default_factory=dict)
    favorites: List[str] = field(default_factory=list)


@dataclass
class TurnResult:
    """What the engine decided for a single line of input."""

    kind: CommandKind
    responses: List[str] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)
    sentiment: str = "neutral"
    keywords: List[str] = field(default_factory=list)
    is_error: bool = False

    @property
    def is_exit(self) -> bool:
        return self.kind is CommandKind.EXIT

    def to_payload(self) -> Mapping[str, Any]:
        return {
            "kind": self.kind.value,
            "responses": list(self.responses),
            "topics": list(self.topics),
            "sentiment": self.sentiment,
            "keywords": list(self.keywords),
        }


class ConsoleBoundary(Protocol):
    """The three console operations the conversation core depends on."""

    def display_text(self, text: str, *, slow: bool = True) -> None:
        ...

    def display_error(self, text: str) -> None:
        ...

    def read_line(self, prompt: str = "") -> str:
        ...


__all__ = [
    "CommandKind",
    "ConsoleBoundary",
    "ResponseEntry",
    "TurnResult",
    "TurnState",
    "UserProfile",
]
