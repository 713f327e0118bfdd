"""Text measurement and word wrapping."""

import re
from typing import Protocol

PT_TO_MM = 25.4 / 72


class TextMeasurer(Protocol):
    """Measures rendered text width in millimetres."""

    def width(self, text: str, size: float, bold: bool = False) -> float:
        ...


class FixedWidthMeasurer:
    """Deterministic approximation of proportional font metrics.

    Every character advances by ``advance`` em (bold text a little wider),
    which keeps layout identical on every platform and without any font
    files installed.
    """

    def __init__(self, advance: float = 0.5, bold_factor: float = 1.08):
        self.advance = advance
        self.bold_factor = bold_factor

    def width(self, text: str, size: float, bold: bool = False) -> float:
        em = size * PT_TO_MM
        factor = self.bold_factor if bold else 1.0
        return len(text) * em * self.advance * factor


def _split_long_word(word: str, max_width: float, measurer: TextMeasurer, size: float) -> list[str]:
    pieces: list[str] = []
    current = ""
    for ch in word:
        candidate = current + ch
        if current and measurer.width(candidate, size) > max_width:
            pieces.append(current)
            current = ch
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def wrap_text(text: str, max_width: float, measurer: TextMeasurer, size: float) -> list[str]:
    """Greedy word wrap of ``text`` into lines no wider than ``max_width``.

    Line breaks in the text are kept. Words are never broken unless a single
    word is wider than ``max_width`` on its own.

    Returns:
        At least one line (an empty string for empty text)
    """
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in re.split(r"\s+", paragraph.strip()):
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if measurer.width(candidate, size) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            if measurer.width(word, size) <= max_width:
                current = word
            else:
                *full, current = _split_long_word(word, max_width, measurer, size)
                lines.extend(full)
        lines.append(current)
    return lines or [""]
