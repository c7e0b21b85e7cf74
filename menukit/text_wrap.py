"""Wrapping and truncating text by terminal column width."""

from __future__ import annotations

from typing import Iterable

import regex
from wcwidth import wcwidth

_GRAPHEME = regex.compile(r"\X")


def _width(text: str) -> int:
    """Columns ``text`` takes on a terminal; control characters count as zero."""
    return sum(max(0, wcwidth(char)) for char in text)


def _graphemes(text: str) -> list[str]:
    return _GRAPHEME.findall(text)


def _break_word(word: str, max_width: int) -> Iterable[str]:
    """Cut a word that is too wide into pieces at most ``max_width`` columns wide.

    Graphemes wider than ``max_width`` on their own are dropped.
    """
    piece = ""
    width = 0
    for grapheme in _graphemes(word):
        grapheme_width = _width(grapheme)
        if grapheme_width > max_width:
            continue
        if width + grapheme_width > max_width:
            yield piece
            piece = grapheme
            width = grapheme_width
        else:
            piece += grapheme
            width += grapheme_width
    if piece:
        yield piece


def split_string(text: str, max_width: int) -> list[str]:
    """Split ``text`` into lines at most ``max_width`` columns wide.

    Lines break at whitespace where possible; words wider than a line are
    cut between graphemes.
    """
    words: list[str] = []
    for word in text.split():
        if _width(word) > max_width:
            words.extend(_break_word(word, max_width))
        else:
            words.append(word)

    lines: list[str] = []
    current = ""
    for word in words:
        if _width(current) + _width(word) > max_width:
            lines.append(current.rstrip())
            current = word + " "
        else:
            current += word + " "

    if current.rstrip():
        lines.append(current.rstrip())
    return lines


def truncate_string_list(lines: list[str], truncation_chars: str) -> list[str]:
    """Replace the last graphemes of ``lines`` with ``truncation_chars``.

    The replacement runs backwards from the end of the last line and carries
    on into earlier lines when a line is too short. A new list is returned.
    """
    result = list(lines)
    pending = list(reversed(truncation_chars))
    if not pending:
        return result

    for position in range(len(result) - 1, -1, -1):
        graphemes = _graphemes(result[position])
        count = min(len(graphemes), len(pending))
        replacement, pending = pending[:count], pending[count:]
        kept = graphemes[: len(graphemes) - count]
        result[position] = "".join(kept) + "".join(reversed(replacement))
        if not pending:
            break
    return result