"""Console presentation: colored text, typing effect, ASCII art and audio greeting."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

from colorama import Fore, Style
from colorama import init as colorama_init
from PIL import Image

logger = logging.getLogger(__name__)

ASCII_RAMP = "#8&o:*. "
ART_SIZE = (100, 50)

BANNER = r"""
  ____      _                ____        _
 / ___|   _| |__   ___ _ __ | __ )  ___ | |_
| |  | | | | '_ \ / _ \ '__||  _ \ / _ \| __|
| |__| |_| | |_) |  __/ |   | |_) | (_) | |_
 \____\__, |_.__/ \___|_|   |____/ \___/ \__|
      |___/     Cybersecurity Awareness Bot
"""

RULE = "=" * 71


def image_to_ascii(image_path: str | Path, width: int = ART_SIZE[0], height: int = ART_SIZE[1]) -> str:
    """Render an image file as text using a dark-to-light character ramp."""

    with Image.open(image_path) as source:
        resized = source.convert("RGB").resize((width, height))
        rows = []
        for y in range(height):
            chars = []
            for x in range(width):
                red, green, blue = resized.getpixel((x, y))
                gray = round(0.3 * red + 0.59 * green + 0.11 * blue)
                chars.append(gray_to_char(gray))
            rows.append("".join(chars))
    return "\n".join(rows)


def gray_to_char(gray: int) -> str:
    gray = min(max(gray, 0), 255)
    return ASCII_RAMP[gray * (len(ASCII_RAMP) - 1) // 255]


def play_wav(path: str | Path) -> None:
    """Play a WAV file synchronously through the default output device."""

    # Imported lazily: both need native audio libraries that may be absent.
    import sounddevice
    import soundfile

    data, samplerate = soundfile.read(str(path))
    sounddevice.play(data, samplerate)
    sounddevice.wait()


class ConsoleIO:
    """Terminal implementation of the display / read-line boundary."""

    def __init__(
        self,
        *,
        typing_delay: float = 0.02,
        color: bool = True,
        stream: Optional[TextIO] = None,
        input_func: Optional[Callable[[str], str]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.typing_delay = max(0.0, typing_delay)
        self.color = color
        if color:
            colorama_init()
        self.stream = stream or sys.stdout
        self._input = input_func or input
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Core boundary
    # ------------------------------------------------------------------
    def display_text(self, text: str, *, slow: bool = True) -> None:
        self._write(self._paint(Fore.MAGENTA), flush=False)
        if slow and self.typing_delay > 0:
            self.type_text(text)
        else:
            self._write(text)
        self._write(self._paint(Style.RESET_ALL) + "\n")

    def display_error(self, text: str) -> None:
        self._write(f"{self._paint(Fore.RED)}{text}{self._paint(Style.RESET_ALL)}\n")

    def read_line(self, prompt: str = "") -> str:
        line = self._input(f"{self._paint(Fore.YELLOW)}{prompt}{self._paint(Style.RESET_ALL)}")
        return (line or "").strip()

    def type_text(self, text: str) -> None:
        for char in text:
            self._write(char)
            self._sleep(self.typing_delay)

    # ------------------------------------------------------------------
    # Startup sequence
    # ------------------------------------------------------------------
    def play_greeting(self, audio_path: str | Path | None) -> bool:
        if audio_path is None:
            return False
        path = Path(audio_path)
        if not path.is_file():
            self.display_error(f"Audio file not found at: {path.resolve()}")
            return False
        try:
            play_wav(path)
        except Exception as exc:
            logger.warning("Voice greeting failed: %s", exc)
            self.display_error(f"Error playing voice greeting: {exc}")
            return False
        return True

    def display_ascii_art(self, image_path: str | Path | None = None) -> None:
        art = BANNER
        if image_path is not None and Path(image_path).is_file():
            try:
                art = image_to_ascii(image_path)
            except (OSError, ValueError) as exc:
                logger.warning("ASCII art rendering failed: %s", exc)
                self.display_error(f"Error generating ASCII art: {exc}")
        self._write(f"{self._paint(Fore.GREEN)}{art}{self._paint(Style.RESET_ALL)}\n")

    def display_welcome(self, name: str) -> None:
        lines = [
            RULE,
            f"Hello, {name}! Welcome to the Cybersecurity Awareness Bot.",
            "I'm here to help you stay safe online.",
            RULE,
        ]
        self._write(self._paint(Fore.CYAN) + "\n".join(lines) + self._paint(Style.RESET_ALL) + "\n")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _paint(self, code: str) -> str:
        return code if self.color else ""

    def _write(self, text: str, *, flush: bool = True) -> None:
        self.stream.write(text)
        if flush:
            self.stream.flush()


__all__ = ["ASCII_RAMP", "BANNER", "ConsoleIO", "gray_to_char", "image_to_ascii", "play_wav"]
