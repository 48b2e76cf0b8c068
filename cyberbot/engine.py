"""Conversation loop: command dispatch and the keyword response pipeline."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from . import phrases
from .errors import ConversationError, ValidationError
from .knowledge import KnowledgeBase
from .schemas import CommandKind, ConsoleBoundary, TurnResult, TurnState
from .storage import MemoryStore

logger = logging.getLogger(__name__)

BOT_LABEL = "ChatBot: "


def detect_sentiment(text: str) -> str:
    """Return the first sentiment whose keywords occur in ``text``."""

    if not text or not text.strip():
        return "neutral"
    lowered = text.lower()
    for sentiment, keywords in phrases.SENTIMENT_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return sentiment
    return "neutral"


def contextual_prefix(count: int, rng: random.Random) -> Optional[str]:
    """Pick a prefix for a keyword discussed ``count`` times, if any applies."""

    for threshold, variants in phrases.CONTEXT_PREFIX_TIERS:
        if count >= threshold:
            return rng.choice(variants)
    return None


def unique(items: Sequence[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


@dataclass
class ConversationEngine:
    """Turn raw input lines into bot replies, consulting knowledge and memory."""

    knowledge: KnowledgeBase
    memory: MemoryStore
    console: ConsoleBoundary
    rng: random.Random = field(default_factory=random.Random)
    state: TurnState = TurnState.AWAITING_INPUT

    def __post_init__(self) -> None:
        self._handlers: Dict[CommandKind, Callable[[str], TurnResult]] = {
            CommandKind.EXIT: self._handle_exit,
            CommandKind.HELP: self._handle_help,
            CommandKind.NAME_QUERY: self._handle_name_query,
            CommandKind.INTEREST_QUERY: self._handle_interest_query,
            CommandKind.FAVORITES: self._handle_favorites,
        }

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def run(self) -> int:
        """Process turns until the exit command. Returns the exit code."""

        while self.state is not TurnState.EXITED:
            try:
                self.step()
            except ConversationError as exc:
                logger.exception("Conversation error")
                self.console.display_error(f"Conversation error: {exc}")
                if self.state is TurnState.DISPATCHING:
                    self.state = TurnState.AWAITING_INPUT
        return 0

    def step(self) -> TurnResult:
        """Read one line, answer it and display the reply."""

        try:
            raw = self.console.read_line(self._input_prompt())
        except (EOFError, KeyboardInterrupt):
            raw = "exit"
        try:
            result = self.respond(raw)
            self.render(result)
        except ConversationError:
            raise
        except Exception as exc:
            raise ConversationError(str(exc) or exc.__class__.__name__) from exc
        return result

    def _input_prompt(self) -> str:
        return f"{self.memory.name or 'You'}: "

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def respond(self, raw: Optional[str]) -> TurnResult:
        """Dispatch one line of input and return the resulting replies."""

        text = (raw or "").strip()
        if not text:
            return TurnResult(kind=CommandKind.EMPTY, responses=[phrases.REPHRASE], is_error=True)

        self.state = TurnState.DISPATCHING
        kind = self.detect_command(text)
        if kind is not None:
            result = self._handlers[kind](text)
        else:
            result = self._process_natural_language(text)

        self.state = TurnState.EXITED if result.is_exit else TurnState.AWAITING_INPUT
        logger.debug("Turn dispatched: %s", result.to_payload())
        return result

    def detect_command(self, text: str) -> Optional[CommandKind]:
        lowered = text.strip().lower()
        if lowered in phrases.EXIT_COMMANDS:
            return CommandKind.EXIT
        if lowered in phrases.HELP_COMMANDS:
            return CommandKind.HELP
        if any(query in lowered for query in phrases.NAME_QUERIES):
            return CommandKind.NAME_QUERY
        if any(query in lowered for query in phrases.INTEREST_QUERIES):
            return CommandKind.INTEREST_QUERY
        if lowered == phrases.FAVORITES_COMMAND or lowered.startswith(phrases.FAVORITES_COMMAND + " "):
            return CommandKind.FAVORITES
        return None

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------
    def _handle_exit(self, text: str) -> TurnResult:
        return TurnResult(kind=CommandKind.EXIT, responses=[phrases.FAREWELL])

    def _handle_help(self, text: str) -> TurnResult:
        lines = [phrases.HELP_INTRO]
        lines.extend(f"- {topic}" for topic in self.knowledge.list_topics())
        return TurnResult(kind=CommandKind.HELP, responses=lines)

    def _handle_name_query(self, text: str) -> TurnResult:
        name = self.memory.name
        reply = phrases.NAME_RECALL.format(name=name) if name else phrases.NAME_UNKNOWN
        return TurnResult(kind=CommandKind.NAME_QUERY, responses=[reply])

    def _handle_interest_query(self, text: str) -> TurnResult:
        interest = self.memory.current_interest
        if not interest:
            return TurnResult(kind=CommandKind.INTEREST_QUERY, responses=[phrases.NO_INTEREST])
        base = self.knowledge.lookup(interest) or phrases.FALLBACK
        reply = phrases.INTEREST_RECALL.format(interest=interest, response=_lower_first(base))
        return TurnResult(kind=CommandKind.INTEREST_QUERY, responses=[reply], topics=[interest])

    def _handle_favorites(self, text: str) -> TurnResult:
        lowered = text.lower()
        if lowered == phrases.FAVORITES_ADD or lowered.startswith(phrases.FAVORITES_ADD + " "):
            payload = text[len(phrases.FAVORITES_ADD) :].strip()
            if not payload:
                payload = self.console.read_line(phrases.FAVORITE_PROMPT)
            try:
                saved = self.memory.add_favorite(payload)
            except ValidationError:
                return TurnResult(
                    kind=CommandKind.FAVORITES, responses=[phrases.FAVORITE_EMPTY], is_error=True
                )
            return TurnResult(
                kind=CommandKind.FAVORITES, responses=[phrases.FAVORITE_SAVED.format(text=saved)]
            )

        favorites = self.memory.favorites
        if not favorites:
            return TurnResult(kind=CommandKind.FAVORITES, responses=[phrases.NO_FAVORITES])
        lines = [phrases.FAVORITES_INTRO]
        lines.extend(f"{index}. {item}" for index, item in enumerate(favorites, start=1))
        return TurnResult(kind=CommandKind.FAVORITES, responses=lines)

    # ------------------------------------------------------------------
    # Natural-language path
    # ------------------------------------------------------------------
    def _process_natural_language(self, text: str) -> TurnResult:
        sentiment = detect_sentiment(text)
        extracted = self.knowledge.extract_keywords(text)
        keywords = unique(extracted)
        # Prefixes depend on how often a keyword came up before this turn.
        prior_counts = {keyword: self.memory.get_keyword_count(keyword) for keyword in keywords}
        for keyword in extracted:
            self.memory.record_keyword(keyword)

        interest = self._match_interest_expression(text)
        if interest is not None:
            topic, response = interest
            return TurnResult(
                kind=CommandKind.INTEREST,
                responses=[response],
                topics=[topic],
                sentiment=sentiment,
                keywords=keywords,
            )

        matches = self._resolve_topics(keywords, prior_counts)
        prefix = phrases.SENTIMENT_PREFIXES.get(sentiment, "")
        if not matches:
            return TurnResult(
                kind=CommandKind.NO_MATCH,
                responses=[prefix + phrases.FALLBACK],
                sentiment=sentiment,
                keywords=keywords,
            )
        return TurnResult(
            kind=CommandKind.TOPIC,
            responses=[prefix + response for _, response in matches],
            topics=[topic for topic, _ in matches],
            sentiment=sentiment,
            keywords=keywords,
        )

    def _match_interest_expression(self, text: str) -> Optional[Tuple[str, str]]:
        lowered = text.lower()
        if phrases.INTEREST_MARKER not in lowered:
            return None
        for topic in self.knowledge.list_topics():
            if topic in lowered:
                self.memory.set_interest(topic)
                response = self.knowledge.lookup(topic)
                if response is not None:
                    return topic, response
        return None

    def _resolve_topics(
        self, keywords: Sequence[str], prior_counts: Mapping[str, int]
    ) -> List[Tuple[str, str]]:
        matches: List[Tuple[str, str]] = []
        for keyword in keywords:
            base = self.knowledge.lookup(keyword)
            if base is None:
                continue
            response = base
            count = prior_counts.get(keyword, 0)
            if count > 1:
                prefix = contextual_prefix(count, self.rng)
                if prefix:
                    response = prefix + _lower_first(base)
            if self.memory.is_current_interest(keyword):
                response = phrases.INTEREST_RECALL.format(
                    interest=keyword, response=_lower_first(response)
                )
            elif count > 1 and not self.knowledge.is_meta_topic(keyword):
                self.memory.set_interest(keyword)
            matches.append((keyword, response))
        return matches

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def render(self, result: TurnResult) -> None:
        if result.is_error:
            for line in result.responses:
                self.console.display_error(BOT_LABEL + line)
            return
        if result.kind is CommandKind.TOPIC:
            for topic, line in zip(result.topics, result.responses):
                self.console.display_text(f"{topic.upper()} >> {line}")
            return
        if result.kind in (CommandKind.HELP, CommandKind.FAVORITES) and len(result.responses) > 1:
            head, *rest = result.responses
            self.console.display_text(BOT_LABEL + head)
            for line in rest:
                self.console.display_text(line, slow=False)
            return
        for line in result.responses:
            self.console.display_text(BOT_LABEL + line)


def _lower_first(text: str) -> str:
    # Keeps acronyms such as "VPN" or "HTTPS" intact.
    if len(text) > 1 and text[0].isupper() and text[1].islower():
        return text[0].lower() + text[1:]
    return text


__all__ = [
    "BOT_LABEL",
    "ConversationEngine",
    "contextual_prefix",
    "detect_sentiment",
    "unique",
]
