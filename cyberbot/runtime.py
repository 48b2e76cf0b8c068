"""Runtime wiring and command-line entry point for the awareness chatbot."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

from .console import ConsoleIO
from .engine import ConversationEngine
from .errors import FatalError, ValidationError
from .knowledge import KnowledgeBase
from .schemas import ConsoleBoundary
from .storage import DEFAULT_MEMORY_FILE, MemoryStore

logger = logging.getLogger(__name__)

MEMORY_FILE_ENV = "CYBERBOT_MEMORY_FILE"
DEFAULT_AUDIO = "audio/welcome.wav"
DEFAULT_IMAGE = "images/cybersecurity.png"
DEFAULT_NAME = "User"
NAME_ATTEMPTS = 3


@dataclass
class ChatbotRuntime:
    """Wires the console, knowledge base, memory store and conversation engine."""

    memory_path: Optional[str] = DEFAULT_MEMORY_FILE
    audio_path: Optional[str] = DEFAULT_AUDIO
    image_path: Optional[str] = DEFAULT_IMAGE
    greeting: bool = True
    typing_delay: float = 0.02
    color: bool = True
    seed: Optional[int] = None
    console: Optional[ConsoleIO] = None

    def __post_init__(self) -> None:
        try:
            if self.console is None:
                self.console = ConsoleIO(typing_delay=self.typing_delay, color=self.color)
            self.rng = random.Random(self.seed)
            self.knowledge = KnowledgeBase(rng=self.rng)
            self.memory = MemoryStore(self.memory_path, on_warning=self.console.display_error)
            self.engine = ConversationEngine(
                knowledge=self.knowledge,
                memory=self.memory,
                console=self.console,
                rng=self.rng,
            )
        except Exception as exc:
            raise FatalError(f"Could not initialise the chatbot: {exc}") from exc

    # ------------------------------------------------------------------
    # Startup sequence
    # ------------------------------------------------------------------
    def welcome(self) -> None:
        if not self.greeting:
            return
        # Cosmetic steps must never block the conversation.
        try:
            self.console.play_greeting(self.audio_path)
            self.console.display_ascii_art(self.image_path)
        except Exception as exc:
            logger.warning("Greeting failed: %s", exc)
            self.console.display_error(f"Greeting failed: {exc}")

    def identify_user(self) -> str:
        console: ConsoleBoundary = self.console
        for attempt in range(1, NAME_ATTEMPTS + 1):
            try:
                raw = console.read_line("Enter your name: ")
            except (EOFError, KeyboardInterrupt):
                break
            try:
                return self.memory.set_name(raw)
            except ValidationError as exc:
                console.display_error(f"{exc} (Attempt {attempt}/{NAME_ATTEMPTS})")
        console.display_error(f"Using default name '{DEFAULT_NAME}'")
        return self.memory.set_name(DEFAULT_NAME)

    def start(self) -> int:
        self.welcome()
        name = self.identify_user()
        self.console.display_welcome(name)
        self.console.display_text("Type 'help' for topics or 'exit' to quit.")
        return self.engine.run()


def _default_memory_path() -> str:
    return os.environ.get(MEMORY_FILE_ENV) or DEFAULT_MEMORY_FILE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the cybersecurity awareness chatbot")
    parser.add_argument(
        "--memory-file",
        default=None,
        help=f"Text file for keyword counts, interest and favorites (env: {MEMORY_FILE_ENV})",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep memory for this session only",
    )
    parser.add_argument("--audio", default=DEFAULT_AUDIO, help="WAV file played at startup")
    parser.add_argument("--image", default=DEFAULT_IMAGE, help="Image rendered as ASCII art at startup")
    parser.add_argument("--no-greeting", action="store_true", help="Skip the audio greeting and ASCII art")
    parser.add_argument(
        "--delay",
        type=int,
        default=20,
        help="Typing effect delay per character in milliseconds (0 disables)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for response variation")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="ERROR",
        help="Logging threshold",
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging to trace dispatch decisions and memory flushes.",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    level = logging.DEBUG if args.verbose else getattr(logging, args.log_level)
    logging.basicConfig(level=level, filename=args.log_file)

    memory_path = None if args.no_persist else (args.memory_file or _default_memory_path())
    try:
        runtime = ChatbotRuntime(
            memory_path=memory_path,
            audio_path=args.audio,
            image_path=args.image,
            greeting=not args.no_greeting,
            typing_delay=max(args.delay, 0) / 1000.0,
            color=not args.no_color,
            seed=args.seed,
        )
    except FatalError as exc:
        logger.critical("Startup failed: %s", exc)
        print(f"Critical error: {exc}", file=sys.stderr)
        return 1

    try:
        return runtime.start()
    except Exception as exc:
        logger.critical("Unrecoverable error: %s", exc, exc_info=True)
        print(f"Critical error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
