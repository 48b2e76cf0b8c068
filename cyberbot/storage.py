"""Flat-file persistence for per-user keyword counts, interest and favorites."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .errors import PersistenceError, ValidationError
from .schemas import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_FILE = "user_memory.txt"
INTEREST_MARKER = "[interest]"
FAVORITE_MARKER = "[favorite]"

# (kind, key, value) where kind is "count", "interest" or "favorite".
Record = Tuple[str, str, object]


def parse_line(line: str) -> Optional[Record]:
    """Parse one memory-file line, returning ``None`` when it is malformed."""

    text = line.strip()
    if not text:
        return None
    if text.startswith(INTEREST_MARKER):
        value = text[len(INTEREST_MARKER) :].strip().lower()
        return ("interest", value, value) if value else None
    if text.startswith(FAVORITE_MARKER):
        value = text[len(FAVORITE_MARKER) :].strip()
        return ("favorite", value, value) if value else None

    key, sep, raw_count = text.rpartition(":")
    key = key.strip().lower()
    if not sep or not key:
        return None
    try:
        count = int(raw_count.strip())
    except ValueError:
        return None
    if count < 0:
        return None
    return ("count", key, count)


def format_profile(profile: UserProfile) -> List[str]:
    lines = [f"{key}:{count}" for key, count in profile.keyword_counts.items()]
    if profile.current_interest:
        lines.append(f"{INTEREST_MARKER} {profile.current_interest}")
    lines.extend(f"{FAVORITE_MARKER} {text}" for text in profile.favorites)
    return lines


def validate_name(raw: Optional[str]) -> str:
    name = (raw or "").strip()
    if not name:
        raise ValidationError("Name cannot be empty.")
    if any(not (char.isalpha() or char.isspace()) for char in name):
        raise ValidationError("Only letters and spaces allowed.")
    return name


class MemoryStore:
    """Holds the active :class:`UserProfile` and mirrors it to a text file.

    Every mutation rewrites the whole file. Any I/O failure is reported once
    through ``on_warning`` and the store continues in session-only mode.
    """

    def __init__(
        self,
        path: str | Path | None = DEFAULT_MEMORY_FILE,
        *,
        on_warning: Optional[Callable[[str], None]] = None,
        autoload: bool = True,
    ) -> None:
        self.path = Path(path).expanduser() if path is not None else None
        self.profile = UserProfile()
        self._on_warning = on_warning
        self.persistent = self.path is not None
        if autoload:
            self.load()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def name(self) -> Optional[str]:
        return self.profile.name

    def set_name(self, raw: Optional[str]) -> str:
        """Validate and store the session name. The name is never persisted."""

        name = validate_name(raw)
        self.profile.name = name
        return name

    # ------------------------------------------------------------------
    # Keyword counts
    # ------------------------------------------------------------------
    def record_keyword(self, keyword: Optional[str]) -> int:
        key = (keyword or "").strip().lower()
        if not key:
            return 0
        counts = self.profile.keyword_counts
        counts[key] = counts.get(key, 0) + 1
        self.save()
        return counts[key]

    def get_keyword_count(self, keyword: Optional[str]) -> int:
        key = (keyword or "").strip().lower()
        return self.profile.keyword_counts.get(key, 0)

    # ------------------------------------------------------------------
    # Interest
    # ------------------------------------------------------------------
    @property
    def current_interest(self) -> Optional[str]:
        return self.profile.current_interest

    def set_interest(self, topic: Optional[str]) -> str:
        value = (topic or "").strip().lower()
        if not value:
            raise ValidationError("Topic cannot be empty.")
        self.profile.current_interest = value
        self.save()
        return value

    def has_interest(self) -> bool:
        return bool(self.profile.current_interest)

    def is_current_interest(self, topic: Optional[str]) -> bool:
        if not topic or not self.profile.current_interest:
            return False
        return topic.strip().lower() == self.profile.current_interest

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------
    @property
    def favorites(self) -> List[str]:
        return list(self.profile.favorites)

    def add_favorite(self, text: Optional[str]) -> str:
        value = (text or "").strip()
        if not value:
            raise ValidationError("Favorites cannot be empty.")
        self.profile.favorites.append(value)
        self.save()
        return value

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Merge the persisted file into the in-memory profile."""

        if not self.persistent or self.path is None:
            return
        try:
            lines = self._read_lines(self.path)
        except PersistenceError as exc:
            self._degrade(f"Memory load failed: {exc}")
            return
        self._merge(lines)

    def save(self) -> None:
        """Overwrite the persisted file with the full current state."""

        if not self.persistent or self.path is None:
            return
        content = "\n".join(format_profile(self.profile))
        try:
            self.path.write_text(content + "\n" if content else "", encoding="utf-8")
        except OSError as exc:
            self._degrade(f"Memory save failed: {exc}")
            return
        logger.debug("Flushed memory to %s", self.path)

    def _read_lines(self, path: Path) -> List[str]:
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
                logger.info("Created empty memory file at %s", path)
                return []
            return path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(str(exc)) from exc

    def _merge(self, lines: Iterable[str]) -> None:
        profile = self.profile
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            record = parse_line(line)
            if record is None:
                logger.warning("Skipping malformed memory line %s: %r", number, line)
                continue
            kind, key, value = record
            if kind == "count":
                if isinstance(value, int) and value > 0:
                    profile.keyword_counts[key] = max(profile.keyword_counts.get(key, 0), value)
            elif kind == "interest":
                if not profile.current_interest:
                    profile.current_interest = key
            elif key not in profile.favorites:
                profile.favorites.append(key)

    def _degrade(self, message: str) -> None:
        logger.warning("%s; continuing with session-only memory", message)
        self.persistent = False
        if self._on_warning is not None:
            self._on_warning(f"[Memory warning] {message}. Continuing without saving.")


__all__ = [
    "DEFAULT_MEMORY_FILE",
    "FAVORITE_MARKER",
    "INTEREST_MARKER",
    "MemoryStore",
    "format_profile",
    "parse_line",
    "validate_name",
]
