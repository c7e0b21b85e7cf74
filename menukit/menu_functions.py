"""Helpers shared by the menus: selection markers, common prefixes and buffer edits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from menukit.base import Editor, Suggestion

_ASCII_DIGITS = "0123456789"


class ParseAction(Enum):
    """What a selection marker found in a string asks for."""

    FORWARD_SEARCH = auto()
    BACKWARD_SEARCH = auto()
    LAST_TOKEN = auto()
    LAST_COMMAND = auto()
    BACKWARD_PREFIX_SEARCH = auto()


@dataclass(frozen=True)
class ParseResult:
    """Result of splitting a string at a selection marker such as ``!10``."""

    remainder: str
    index: int | None = None
    marker: str | None = None
    action: ParseAction = ParseAction.FORWARD_SEARCH
    prefix: str | None = None


def parse_selection_char(buffer: str, marker: str) -> ParseResult:
    """Split ``buffer`` at the first ``marker`` followed by a number or the end.

    A ``-`` among the digits turns the search backwards. A marker at the very
    end of the buffer selects index 0.
    """
    action = ParseAction.FORWARD_SEARCH
    for position, char in enumerate(buffer):
        if char != marker:
            continue
        rest = buffer[position + 1 :]
        if not rest:
            return ParseResult(
                remainder=buffer[:position],
                index=0,
                marker=buffer[position:],
                action=action,
                prefix=buffer[position:],
            )
        if rest[0] in _ASCII_DIGITS or rest[0] == "-":
            count = 0
            size = 1
            for next_char in rest:
                if next_char == "-":
                    action = ParseAction.BACKWARD_SEARCH
                elif next_char in _ASCII_DIGITS:
                    count = count * 10 + int(next_char)
                else:
                    break
                size += 1
            return ParseResult(
                remainder=buffer[:position],
                index=count,
                marker=buffer[position : position + size],
                action=action,
            )
    return ParseResult(remainder=buffer, action=action)


def _ascii_lower(char: str) -> str:
    return char.lower() if "A" <= char <= "Z" else char


def find_common_string(
    values: Sequence[Suggestion],
) -> tuple[Suggestion | None, int | None]:
    """The first suggestion and the length of the prefix it shares with the rest.

    Characters are compared ignoring ASCII case. The length is ``None`` when
    there is a single suggestion or when no common length can be found.
    """
    if not values:
        return None, None
    first = values[0]
    index: int | None = None
    for suggestion in values[1:]:
        if suggestion.value.startswith(first.value):
            index = len(first.value)
            continue
        mismatch = next(
            (
                position
                for position, (lhs, rhs) in enumerate(zip(first.value, suggestion.value))
                if _ascii_lower(lhs) != _ascii_lower(rhs)
            ),
            None,
        )
        if mismatch is None:
            index = None
        elif index is None:
            index = mismatch
        else:
            index = min(index, mismatch)
    return first, index


def string_difference(new_string: str, old_string: str) -> tuple[int, str]:
    """The position and text that ``new_string`` adds to ``old_string``."""
    if not old_string:
        return 0, new_string

    old_index = 0
    start: int | None = None
    end: int | None = None
    last_old = len(old_string) - 1

    for new_index, char in enumerate(new_string):
        if start is not None:
            equal = (len(old_string) - old_index == len(new_string) - new_index) and (
                new_string[new_index:] == old_string[old_index:]
            )
        else:
            equal = old_index == new_index and char == old_string[old_index]

        if equal:
            old_index = min(old_index + 1, last_old)
            if start is not None and end is None:
                end = new_index
        elif start is None:
            start = new_index

    if start is None:
        return len(new_string), ""
    if end is None:
        return start, new_string[start:]
    return start, new_string[start:end]


def completer_input(
    buffer: str,
    insertion_point: int,
    prev_input: str | None,
    only_buffer_difference: bool,
) -> tuple[str, int]:
    """The text to give to the completer and the position of its end.

    ``prev_input`` is the buffer as it was when the menu was activated; it is
    used only when ``only_buffer_difference`` is set.
    """
    if not only_buffer_difference:
        return buffer[:insertion_point], insertion_point
    if prev_input is None:
        return "", insertion_point
    start, difference = string_difference(buffer, prev_input)
    if difference:
        return difference, start + len(difference)
    return "", insertion_point


def replace_in_buffer(value: Suggestion | None, editor: Editor) -> None:
    """Put the suggestion's value into the editor over its span."""
    if value is None:
        return
    line_buffer = editor.line_buffer
    length = len(line_buffer)
    start = min(value.span.start, length)
    end = min(value.span.end, length)
    text = value.value + " " if value.append_whitespace else value.value

    line_buffer.replace_range(start, end, text)
    line_buffer.insertion_point = max(0, line_buffer.insertion_point + len(text) - (end - start))
    editor.set_line_buffer(line_buffer)


def can_partially_complete(values: Sequence[Suggestion], editor: Editor) -> bool:
    """Complete the prefix shared by all values into the buffer, if that extends the input."""
    first, index = find_common_string(values)
    if first is None or index is None:
        return False

    span = first.span
    matching = first.value[: min(index, len(first.value))]
    # never overwrite what the user has typed
    extends_input = matching.startswith(editor.buffer[span.start : span.end])
    if not matching or not extends_input:
        return False

    line_buffer = editor.line_buffer
    line_buffer.replace_range(span.start, span.end, matching)
    span_length = span.end - span.start
    if len(matching) < span_length:
        offset = max(0, line_buffer.insertion_point - (span_length - len(matching)))
    else:
        offset = line_buffer.insertion_point + len(matching) - span_length
    line_buffer.insertion_point = offset
    editor.set_line_buffer(line_buffer)
    return True