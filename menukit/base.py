"""Core types shared by the menus: styles, events, suggestions and the editor."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

RESET = "\x1b[0m"


class Color(Enum):
    """Terminal foreground colours, valued by their ANSI code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    PURPLE = 35
    CYAN = 36
    WHITE = 37
    DEFAULT = 39
    DARK_GRAY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_PURPLE = 95
    LIGHT_CYAN = 96
    LIGHT_GRAY = 97

    @property
    def foreground_code(self) -> str:
        return str(self.value)

    @property
    def background_code(self) -> str:
        return str(self.value + 10)

    def normal(self) -> Style:
        return Style(foreground=self)

    def bold(self) -> Style:
        return self.normal().bold()

    def dimmed(self) -> Style:
        return self.normal().dimmed()

    def italic(self) -> Style:
        return self.normal().italic()

    def underline(self) -> Style:
        return self.normal().underline()

    def reverse(self) -> Style:
        return self.normal().reverse()


@dataclass(frozen=True)
class Style:
    """An immutable text style; builder methods return new styles."""

    foreground: Color | None = None
    background: Color | None = None
    is_bold: bool = False
    is_dimmed: bool = False
    is_italic: bool = False
    is_underline: bool = False
    is_blink: bool = False
    is_reverse: bool = False
    is_hidden: bool = False
    is_strikethrough: bool = False

    def bold(self) -> Style:
        return dataclasses.replace(self, is_bold=True)

    def dimmed(self) -> Style:
        return dataclasses.replace(self, is_dimmed=True)

    def italic(self) -> Style:
        return dataclasses.replace(self, is_italic=True)

    def underline(self) -> Style:
        return dataclasses.replace(self, is_underline=True)

    def blink(self) -> Style:
        return dataclasses.replace(self, is_blink=True)

    def reverse(self) -> Style:
        return dataclasses.replace(self, is_reverse=True)

    def hidden(self) -> Style:
        return dataclasses.replace(self, is_hidden=True)

    def strikethrough(self) -> Style:
        return dataclasses.replace(self, is_strikethrough=True)

    def fg(self, color: Color) -> Style:
        return dataclasses.replace(self, foreground=color)

    def on(self, color: Color) -> Style:
        return dataclasses.replace(self, background=color)

    @property
    def is_plain(self) -> bool:
        return self == Style()

    def prefix(self) -> str:
        """The escape sequence that switches this style on; empty when plain."""
        flags = (
            (self.is_bold, "1"),
            (self.is_dimmed, "2"),
            (self.is_italic, "3"),
            (self.is_underline, "4"),
            (self.is_blink, "5"),
            (self.is_reverse, "7"),
            (self.is_hidden, "8"),
            (self.is_strikethrough, "9"),
        )
        codes = [code for enabled, code in flags if enabled]
        if self.background is not None:
            codes.append(self.background.background_code)
        if self.foreground is not None:
            codes.append(self.foreground.foreground_code)
        if not codes:
            return ""
        return "\x1b[" + ";".join(codes) + "m"

    def paint(self, text: str) -> str:
        prefix = self.prefix()
        return f"{prefix}{text}{RESET}" if prefix else text


def _default_selected_text_style() -> Style:
    return Color.GREEN.bold().reverse()


def _default_text_style() -> Style:
    return Color.DARK_GRAY.normal()


def _default_description_style() -> Style:
    return Color.YELLOW.normal()


def _default_selected_match_style() -> Style:
    return Color.GREEN.bold().reverse().underline()


def _default_match_style() -> Style:
    return Style().underline()


@dataclass
class MenuTextStyle:
    """Styles used by a menu for its parts."""

    selected_text_style: Style = field(default_factory=_default_selected_text_style)
    text_style: Style = field(default_factory=_default_text_style)
    description_style: Style = field(default_factory=_default_description_style)
    selected_match_style: Style = field(default_factory=_default_selected_match_style)
    match_style: Style = field(default_factory=_default_match_style)


class MenuEventKind(Enum):
    """Every kind of event a menu can receive."""

    ACTIVATE = auto()
    DEACTIVATE = auto()
    EDIT = auto()
    NEXT_ELEMENT = auto()
    PREVIOUS_ELEMENT = auto()
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    NEXT_PAGE = auto()
    PREVIOUS_PAGE = auto()


@dataclass(frozen=True)
class MenuEvent:
    """An event sent to a menu.

    For activation and edit events, ``updated`` tells whether the values have
    already been refreshed (as happens with quick completions).
    """

    kind: MenuEventKind
    updated: bool = False

    @classmethod
    def activate(cls, updated: bool = False) -> MenuEvent:
        return cls(MenuEventKind.ACTIVATE, updated)

    @classmethod
    def deactivate(cls) -> MenuEvent:
        return cls(MenuEventKind.DEACTIVATE)

    @classmethod
    def edit(cls, updated: bool = False) -> MenuEvent:
        return cls(MenuEventKind.EDIT, updated)


@dataclass(frozen=True)
class Span:
    """A half-open range of positions in the line buffer."""

    start: int
    end: int


@dataclass
class Suggestion:
    """One completion candidate."""

    value: str
    description: str | None = None
    style: Style | None = None
    extra: list[str] | None = None
    span: Span = field(default_factory=lambda: Span(0, 0))
    append_whitespace: bool = False


class Completer(ABC):
    """Source of suggestions for a line."""

    @abstractmethod
    def complete(self, line: str, pos: int) -> list[Suggestion]:
        """Suggestions for ``line`` with the cursor at ``pos``."""

    def complete_with_base_ranges(
        self, line: str, pos: int
    ) -> tuple[list[Suggestion], list[tuple[int, int]]]:
        """Suggestions together with the buffer ranges they were based on.

        Consecutive duplicate ranges are collapsed.
        """
        suggestions = self.complete(line, pos)
        ranges: list[tuple[int, int]] = []
        for suggestion in suggestions:
            current = (suggestion.span.start, suggestion.span.end)
            if not ranges or ranges[-1] != current:
                ranges.append(current)
        return suggestions, ranges


class LineBuffer:
    """Text of the line being edited together with the cursor position."""

    def __init__(self, buffer: str = "", insertion_point: int | None = None) -> None:
        self.buffer = buffer
        self.insertion_point = len(buffer) if insertion_point is None else insertion_point

    def __repr__(self) -> str:
        return f"LineBuffer({self.buffer!r}, insertion_point={self.insertion_point})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineBuffer):
            return NotImplemented
        return (self.buffer, self.insertion_point) == (other.buffer, other.insertion_point)

    def __len__(self) -> int:
        return len(self.buffer)

    def copy(self) -> LineBuffer:
        return LineBuffer(self.buffer, self.insertion_point)

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``buffer[start:end]`` with ``text``; the cursor is left alone."""
        if not 0 <= start <= end <= len(self.buffer):
            raise IndexError(f"range {start}..{end} outside buffer of length {len(self.buffer)}")
        self.buffer = self.buffer[:start] + text + self.buffer[end:]


class Editor:
    """A line buffer with an undo history of snapshots."""

    def __init__(self) -> None:
        self._line_buffer = LineBuffer()
        self._history: list[LineBuffer] = [self._line_buffer.copy()]
        self._position = 0

    @property
    def buffer(self) -> str:
        return self._line_buffer.buffer

    @property
    def insertion_point(self) -> int:
        return self._line_buffer.insertion_point

    @property
    def line_buffer(self) -> LineBuffer:
        """A copy of the current line buffer."""
        return self._line_buffer.copy()

    def _push_undo_point(self) -> None:
        del self._history[self._position + 1 :]
        self._history.append(self._line_buffer.copy())
        self._position = len(self._history) - 1

    def set_buffer(self, buffer: str) -> None:
        """Replace the text, put the cursor at its end and record an undo point."""
        self.set_line_buffer(LineBuffer(buffer))

    def set_line_buffer(self, line_buffer: LineBuffer) -> None:
        """Replace the line buffer and record an undo point."""
        self._line_buffer = line_buffer.copy()
        self._push_undo_point()

    def undo(self) -> None:
        if self._position > 0:
            self._position -= 1
        self._line_buffer = self._history[self._position].copy()

    def redo(self) -> None:
        if self._position < len(self._history) - 1:
            self._position += 1
        self._line_buffer = self._history[self._position].copy()

    def is_cursor_at_buffer_end(self) -> bool:
        return self._line_buffer.insertion_point == len(self._line_buffer.buffer)


@dataclass(frozen=True)
class ScreenSize:
    """Size of the terminal the menu is painted on."""

    width: int
    height: int


@dataclass
class MenuSettings:
    """Settings common to every menu."""

    name: str = "menu"
    color: MenuTextStyle = field(default_factory=MenuTextStyle)
    marker: str = "| "
    only_buffer_difference: bool = False


class Menu(ABC):
    """A menu that can be activated, navigated and painted as a string.

    The ``with_*`` methods change the menu and return it, so they chain.
    """

    def __init__(self, settings: MenuSettings | None = None) -> None:
        self.settings = settings if settings is not None else MenuSettings()

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def indicator(self) -> str:
        return self.settings.marker

    def with_name(self, name: str) -> Menu:
        self.settings.name = name
        return self

    def with_text_style(self, style: Style) -> Menu:
        self.settings.color.text_style = style
        return self

    def with_selected_text_style(self, style: Style) -> Menu:
        self.settings.color.selected_text_style = style
        return self

    def with_description_text_style(self, style: Style) -> Menu:
        self.settings.color.description_style = style
        return self

    def with_match_text_style(self, style: Style) -> Menu:
        self.settings.color.match_style = style
        return self

    def with_selected_match_text_style(self, style: Style) -> Menu:
        self.settings.color.selected_match_style = style
        return self

    def with_marker(self, marker: str) -> Menu:
        self.settings.marker = marker
        return self

    def with_only_buffer_difference(self, only_buffer_difference: bool) -> Menu:
        self.settings.only_buffer_difference = only_buffer_difference
        return self

    @abstractmethod
    def is_active(self) -> bool:
        """Whether the menu is active."""

    @abstractmethod
    def menu_event(self, event: MenuEvent) -> None:
        """Record an event to be handled before the next paint."""

    @abstractmethod
    def can_quick_complete(self) -> bool:
        """Whether a single value may be selected at once."""

    @abstractmethod
    def can_partially_complete(
        self, values_updated: bool, editor: Editor, completer: Completer
    ) -> bool:
        """Try to complete the common part of all values into the buffer."""

    @abstractmethod
    def update_values(self, editor: Editor, completer: Completer) -> None:
        """Refresh the values shown by the menu."""

    @abstractmethod
    def update_working_details(
        self, editor: Editor, completer: Completer, screen: ScreenSize
    ) -> None:
        """Handle the pending event and recompute the layout."""

    @abstractmethod
    def replace_in_buffer(self, editor: Editor) -> None:
        """Put the selected value into the buffer."""

    @abstractmethod
    def menu_required_lines(self, terminal_columns: int) -> int:
        """Lines the menu needs to show all of its values."""

    @abstractmethod
    def menu_string(self, available_lines: int, use_ansi_coloring: bool) -> str:
        """The menu rendered as a string to be painted."""

    @abstractmethod
    def min_rows(self) -> int:
        """Minimum rows the menu should be given."""

    @abstractmethod
    def get_values(self) -> list[Suggestion]:
        """The values currently shown."""

    def set_cursor_pos(self, pos: tuple[int, int]) -> None:
        """Tell the menu where the cursor is; ignored by most menus."""