"""Static topic table, stop-word filter and keyword extraction."""

from __future__ import annotations

import logging
import random
import re
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .phrases import META_TOPICS, STOP_WORDS, TOPIC_RESPONSES
from .schemas import ResponseEntry

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"[\s,.?!;:()\[\]{}\"]+")


def tokenize(text: str) -> List[str]:
    """Split ``text`` on whitespace and punctuation into lowercase tokens."""

    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def extract_keywords(text: str, is_stop_word: Callable[[str], bool]) -> List[str]:
    """Return the meaningful tokens of ``text`` in order of appearance.

    Tokens of two characters or fewer and stop words are discarded. Duplicates
    are kept; callers that need unique keywords deduplicate themselves.
    """

    if not text or not text.strip():
        return []
    return [token for token in tokenize(text) if len(token) > 2 and not is_stop_word(token)]


class KnowledgeBase:
    """Read-only lookup table from topic keyword to canned responses."""

    def __init__(
        self,
        responses: Optional[Mapping[str, str | Sequence[str]]] = None,
        *,
        stop_words: Optional[Iterable[str]] = None,
        meta_topics: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        table = TOPIC_RESPONSES if responses is None else responses
        self._entries: Dict[str, ResponseEntry] = {}
        for topic, variants in table.items():
            entry = ResponseEntry.build(topic, variants)
            if entry.topic in self._entries:
                logger.warning("Duplicate topic '%s' replaces an earlier entry", entry.topic)
            self._entries[entry.topic] = entry

        self._stop_words = frozenset(
            word.strip().lower() for word in (STOP_WORDS if stop_words is None else stop_words)
        )
        self._meta_topics = frozenset(
            topic.strip().lower() for topic in (META_TOPICS if meta_topics is None else meta_topics)
        )
        self.rng = rng or random.Random()
        logger.debug(
            "Knowledge base ready: %s topics, %s stop words",
            len(self._entries),
            len(self._stop_words),
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def lookup(self, topic: Optional[str]) -> Optional[str]:
        """Return one response for ``topic`` or ``None`` when it is unknown.

        Topics with several variants return one of them chosen uniformly at
        random from the injected random source.
        """

        entry = self.entry(topic)
        if entry is None:
            return None
        return entry.pick(self.rng)

    def entry(self, topic: Optional[str]) -> Optional[ResponseEntry]:
        if not topic:
            return None
        return self._entries.get(topic.strip().lower())

    def variants(self, topic: str) -> Tuple[str, ...]:
        entry = self.entry(topic)
        return entry.variants if entry else ()

    def __contains__(self, topic: object) -> bool:
        return isinstance(topic, str) and self.entry(topic) is not None

    # ------------------------------------------------------------------
    # Filters and listings
    # ------------------------------------------------------------------
    def is_stop_word(self, word: Optional[str]) -> bool:
        return bool(word) and word.strip().lower() in self._stop_words  # type: ignore[union-attr]

    def is_meta_topic(self, topic: str) -> bool:
        return topic.strip().lower() in self._meta_topics

    def list_topics(self) -> List[str]:
        """Topics available for browsing, in declaration order, without meta-topics."""

        return [topic for topic in self._entries if topic not in self._meta_topics]

    def extract_keywords(self, text: str) -> List[str]:
        return extract_keywords(text, self.is_stop_word)


__all__ = ["KnowledgeBase", "extract_keywords", "tokenize"]
