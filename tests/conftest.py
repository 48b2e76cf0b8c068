from __future__ import annotations

import random
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import pytest

from cyberbot.engine import ConversationEngine
from cyberbot.knowledge import KnowledgeBase
from cyberbot.storage import MemoryStore


class FakeConsole:
    """Scripted console that records everything the bot displays."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.lines: List[str] = list(lines)
        self.prompts: List[str] = []
        self.texts: List[str] = []
        self.errors: List[str] = []
        self.welcomed: List[str] = []

    def display_text(self, text: str, *, slow: bool = True) -> None:
        self.texts.append(text)

    def display_error(self, text: str) -> None:
        self.errors.append(text)

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def display_welcome(self, name: str) -> None:
        self.welcomed.append(name)

    def play_greeting(self, audio_path: Optional[str]) -> bool:
        return False

    def display_ascii_art(self, image_path: Optional[str] = None) -> None:
        return None


EngineFactory = Callable[..., ConversationEngine]


@pytest.fixture
def make_engine(tmp_path: Path) -> EngineFactory:
    def _make(lines: Iterable[str] = (), *, seed: int = 1, persist: bool = True) -> ConversationEngine:
        console = FakeConsole(lines)
        rng = random.Random(seed)
        memory = MemoryStore(tmp_path / "memory.txt" if persist else None, on_warning=console.display_error)
        knowledge = KnowledgeBase(rng=rng)
        return ConversationEngine(knowledge=knowledge, memory=memory, console=console, rng=rng)

    return _make


@pytest.fixture
def fake_console() -> Callable[..., FakeConsole]:
    return FakeConsole
