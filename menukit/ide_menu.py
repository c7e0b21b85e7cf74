"""A completion menu drawn below the cursor, with an optional description box beside it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import zip_longest

from wcwidth import wcwidth

from menukit.base import (
    RESET,
    Completer,
    Editor,
    Menu,
    MenuEvent,
    MenuEventKind,
    MenuSettings,
    ScreenSize,
    Suggestion,
)
from menukit.menu_functions import can_partially_complete as _can_partially_complete
from menukit.menu_functions import completer_input
from menukit.menu_functions import replace_in_buffer as _replace_in_buffer
from menukit.text_wrap import split_string, truncate_string_list

_NO_RECORDS = "NO RECORDS FOUND"
_UNBOUNDED = 0xFFFF


def _width(text: str) -> int:
    """Columns ``text`` takes on a terminal; control characters count as zero."""
    return sum(max(0, wcwidth(char)) for char in text)


def _sub(left: int, right: int) -> int:
    """Subtraction that stops at zero."""
    return max(left - right, 0)


class DescriptionMode(Enum):
    """Where the description box is placed relative to the completions."""

    LEFT = auto()
    RIGHT = auto()
    PREFER_RIGHT = auto()


@dataclass(frozen=True)
class BorderSymbols:
    """Characters used to draw the menu border."""

    top_left: str = "╭"
    top_right: str = "╮"
    bottom_left: str = "╰"
    bottom_right: str = "╯"
    horizontal: str = "─"
    vertical: str = "│"


@dataclass
class _IdeDefaults:
    min_completion_width: int = 0
    max_completion_width: int = 50
    max_completion_height: int = _UNBOUNDED
    padding: int = 0
    border: BorderSymbols | None = None
    cursor_offset: int = 0
    description_mode: DescriptionMode = DescriptionMode.PREFER_RIGHT
    min_description_width: int = 0
    max_description_width: int = 50
    max_description_height: int = 10
    description_offset: int = 1
    correct_cursor_pos: bool = False


@dataclass
class _IdeLayout:
    cursor_col: int = 0
    menu_width: int = 0
    completion_width: int = 0
    description_width: int = 0
    description_is_right: bool = False
    space_left: int = 0
    space_right: int = 0
    description_offset: int = 0
    shortest_base_string: str = field(default="")


class IdeMenu(Menu):
    """Menu showing one suggestion per line, like the completion list of an IDE."""

    def __init__(self, settings: MenuSettings | None = None) -> None:
        super().__init__(
            settings if settings is not None else MenuSettings(name="ide_completion_menu")
        )
        self._active = False
        self._defaults = _IdeDefaults()
        self._layout = _IdeLayout()
        self._values: list[Suggestion] = []
        self._selected = 0
        self._event: MenuEvent | None = None
        self._longest_suggestion = 0
        self._input: str | None = None

    # configuration

    def with_min_completion_width(self, width: int) -> IdeMenu:
        self._defaults.min_completion_width = width
        return self

    def with_max_completion_width(self, width: int) -> IdeMenu:
        self._defaults.max_completion_width = width
        return self

    def with_max_completion_height(self, height: int) -> IdeMenu:
        self._defaults.max_completion_height = height
        return self

    def with_padding(self, padding: int) -> IdeMenu:
        self._defaults.padding = padding
        return self

    def with_default_border(self) -> IdeMenu:
        self._defaults.border = BorderSymbols()
        return self

    def with_border(
        self,
        top_right: str,
        top_left: str,
        bottom_right: str,
        bottom_left: str,
        horizontal: str,
        vertical: str,
    ) -> IdeMenu:
        self._defaults.border = BorderSymbols(
            top_left=top_left,
            top_right=top_right,
            bottom_left=bottom_left,
            bottom_right=bottom_right,
            horizontal=horizontal,
            vertical=vertical,
        )
        return self

    def with_cursor_offset(self, cursor_offset: int) -> IdeMenu:
        self._defaults.cursor_offset = cursor_offset
        return self

    def with_description_mode(self, description_mode: DescriptionMode) -> IdeMenu:
        self._defaults.description_mode = description_mode
        return self

    def with_min_description_width(self, min_description_width: int) -> IdeMenu:
        self._defaults.min_description_width = min_description_width
        return self

    def with_max_description_width(self, max_description_width: int) -> IdeMenu:
        self._defaults.max_description_width = max_description_width
        return self

    def with_max_description_height(self, max_description_height: int) -> IdeMenu:
        self._defaults.max_description_height = max_description_height
        return self

    def with_description_offset(self, description_offset: int) -> IdeMenu:
        self._defaults.description_offset = description_offset
        return self

    def with_correct_cursor_pos(self, correct_cursor_pos: bool) -> IdeMenu:
        self._defaults.correct_cursor_pos = correct_cursor_pos
        return self

    # helpers

    @property
    def _border_width(self) -> int:
        return 2 if self._defaults.border is not None else 0

    def _move_next(self) -> None:
        if self._selected < _sub(len(self._values), 1):
            self._selected += 1
        else:
            self._selected = 0

    def _move_previous(self) -> None:
        if self._selected > 0:
            self._selected -= 1
        else:
            self._selected = _sub(len(self._values), 1)

    def _selected_value(self) -> Suggestion | None:
        if self._selected < len(self._values):
            return self._values[self._selected]
        return None

    def _rows(self) -> int:
        if not self._values:
            return 1
        rows = len(self._values) + self._border_width
        selected = self._selected_value()
        description_height = 0
        if selected is not None and selected.description is not None:
            _, description_height = self._description_dims(
                selected.description,
                self._layout.description_width,
                self._defaults.max_description_height,
                0,
            )
        description_height = min(description_height, self._defaults.max_description_height)
        return max(rows, description_height)

    def _no_records_msg(self, use_ansi_coloring: bool) -> str:
        if use_ansi_coloring:
            return f"{self.settings.color.selected_text_style.prefix()}{_NO_RECORDS}{RESET}"
        return _NO_RECORDS

    def _create_description(
        self,
        description: str,
        use_ansi_coloring: bool,
        available_width: int,
        available_height: int,
        min_width: int,
    ) -> list[str]:
        if not description or available_width == 0 or available_height == 0:
            return []

        border_width = self._border_width
        content_width = _sub(available_width, border_width)
        content_height = _sub(available_height, border_width)

        lines = split_string(description, content_width)
        if len(lines) > content_height:
            lines = truncate_string_list(lines[:content_height], "...")

        content_width = max(
            max((_width(line) for line in lines), default=0),
            _sub(min_width, border_width),
        )

        style = self.settings.color.description_style.prefix()
        border = self._defaults.border

        def body(line: str) -> str:
            padding = " " * _sub(content_width, _width(line))
            if use_ansi_coloring:
                return f"{style}{line}{padding}{RESET}"
            return f"{line}{padding}"

        if border is None:
            return [body(line) for line in lines]

        horizontal = border.horizontal * content_width
        return [
            f"{border.top_left}{horizontal}{border.top_right}",
            *(f"{border.vertical}{body(line)}{border.vertical}" for line in lines),
            f"{border.bottom_left}{horizontal}{border.bottom_right}",
        ]

    def _description_dims(
        self, description: str, max_width: int, max_height: int, min_width: int
    ) -> tuple[int, int]:
        """Width and height of the description box, border included."""
        lines = self._create_description(description, False, max_width, max_height, min_width)
        width = _width(lines[0]) if lines else 0
        return width, len(lines)

    def _create_value_string(
        self, suggestion: Suggestion, index: int, use_ansi_coloring: bool, padding: int
    ) -> str:
        border_width = self._border_width
        border = self._defaults.border
        vertical = border.vertical if border is not None else ""
        completion_width = self._layout.completion_width

        padding_right = _sub(completion_width, len(suggestion.value) + border_width + padding)
        max_string_width = _sub(completion_width, border_width + padding)

        if len(suggestion.value) > max_string_width:
            text = suggestion.value[: _sub(max_string_width, 3)] + "..."
        else:
            text = suggestion.value

        selected = index == self._selected
        left_pad = " " * padding
        right_pad = " " * padding_right

        if not use_ansi_coloring:
            marker = ">" if selected else ""
            return f"{vertical}{left_pad}{marker}{text}{right_pad}{vertical}"

        color = self.settings.color
        match_len = min(len(self._layout.shortest_base_string), len(text))
        match_str, remaining_str = text[:match_len], text[match_len:]
        style_prefix = (suggestion.style or color.text_style).prefix()

        if selected:
            return (
                f"{vertical}{style_prefix}{left_pad}{color.selected_match_style.prefix()}"
                f"{match_str}{RESET}{style_prefix}{color.selected_text_style.prefix()}"
                f"{remaining_str}{right_pad}{RESET}{vertical}"
            )
        return (
            f"{vertical}{style_prefix}{left_pad}{color.match_style.prefix()}"
            f"{match_str}{RESET}{style_prefix}{remaining_str}{right_pad}{RESET}{vertical}"
        )

    # menu behaviour

    def is_active(self) -> bool:
        return self._active

    def can_quick_complete(self) -> bool:
        return True

    def can_partially_complete(
        self, values_updated: bool, editor: Editor, completer: Completer
    ) -> bool:
        if not values_updated:
            self.update_values(editor, completer)
        if _can_partially_complete(self._values, editor):
            # spans must be recomputed for the edited buffer
            self.update_values(editor, completer)
            return True
        return False

    def menu_event(self, event: MenuEvent) -> None:
        if event.kind is MenuEventKind.ACTIVATE:
            self._active = True
        elif event.kind is MenuEventKind.DEACTIVATE:
            self._active = False
            self._input = None
        self._event = event

    def update_values(self, editor: Editor, completer: Completer) -> None:
        line, pos = completer_input(
            editor.buffer,
            editor.insertion_point,
            self._input,
            self.settings.only_buffer_difference,
        )
        values, base_ranges = completer.complete_with_base_ranges(line, pos)
        self._values = list(values)
        buffer = editor.buffer
        self._layout.shortest_base_string = min(
            (buffer[start:end] for start, end in base_ranges), key=len, default=""
        )
        self._selected = 0

    def _handle_event(self, event: MenuEvent, editor: Editor, completer: Completer) -> None:
        kind = event.kind
        if kind is MenuEventKind.ACTIVATE:
            self._active = True
            self._selected = 0
            self._input = editor.buffer if self.settings.only_buffer_difference else None
            if not event.updated:
                self.update_values(editor, completer)
        elif kind is MenuEventKind.DEACTIVATE:
            self._active = False
        elif kind is MenuEventKind.EDIT:
            self._selected = 0
            if not event.updated:
                self.update_values(editor, completer)
        elif kind in (MenuEventKind.NEXT_ELEMENT, MenuEventKind.MOVE_DOWN):
            self._move_next()
        elif kind in (MenuEventKind.PREVIOUS_ELEMENT, MenuEventKind.MOVE_UP):
            self._move_previous()

    def update_working_details(
        self, editor: Editor, completer: Completer, screen: ScreenSize
    ) -> None:
        if self._event is None:
            return
        event, self._event = self._event, None
        self._handle_event(event, editor, completer)

        defaults = self._defaults
        layout = self._layout
        self._longest_suggestion = max((len(value.value) for value in self._values), default=0)

        terminal_width = screen.width
        cursor_pos = layout.cursor_col
        if defaults.correct_cursor_pos:
            cursor_pos = _sub(cursor_pos, _width(layout.shortest_base_string))

        border_width = self._border_width
        selected = self._selected_value()
        description = selected.description if selected is not None else None
        if not description:
            description = None

        min_description_width = defaults.min_description_width if description else 0

        completion_width = min(self._longest_suggestion, _UNBOUNDED) + 2 * defaults.padding
        completion_width += border_width
        completion_width = min(completion_width, defaults.max_completion_width)
        completion_width = max(completion_width, defaults.min_completion_width)
        completion_width = min(completion_width, _sub(terminal_width, min_description_width))
        completion_width = max(completion_width, 3 + border_width)  # room for "..."

        space_beside = _sub(terminal_width, completion_width)
        available_description_width = min(
            max(
                min(space_beside, defaults.max_description_width),
                defaults.min_description_width,
            ),
            space_beside,
        )
        min_description_width = min(min_description_width, available_description_width)

        description_width = 0
        if description is not None:
            description_width, _ = self._description_dims(
                description, available_description_width, _UNBOUNDED, min_description_width
            )

        max_offset = _sub(terminal_width, completion_width + description_width)
        description_offset = min(defaults.description_offset, max_offset)

        layout.completion_width = completion_width
        layout.description_width = description_width
        layout.description_offset = description_offset
        layout.menu_width = completion_width + description_offset + description_width

        cursor_offset = defaults.cursor_offset
        mode = defaults.description_mode
        if mode is DescriptionMode.LEFT:
            layout.description_is_right = False
        elif mode is DescriptionMode.RIGHT:
            layout.description_is_right = True
        else:
            right_distance = max(
                terminal_width
                - (cursor_pos + cursor_offset + description_offset + completion_width),
                0,
            )
            layout.description_is_right = right_distance >= description_width

        if layout.description_is_right:
            left = cursor_pos + cursor_offset
        else:
            left = cursor_pos + cursor_offset - (description_width + description_offset)
        space_left = min(max(left, 0), _sub(terminal_width, layout.menu_width))

        layout.space_left = space_left
        layout.space_right = _sub(terminal_width, space_left + layout.menu_width)

    def replace_in_buffer(self, editor: Editor) -> None:
        _replace_in_buffer(self._selected_value(), editor)

    def min_rows(self) -> int:
        return self._rows()

    def get_values(self) -> list[Suggestion]:
        return self._values

    def menu_required_lines(self, terminal_columns: int) -> int:
        return min(self._rows(), self._defaults.max_completion_height)

    def menu_string(self, available_lines: int, use_ansi_coloring: bool) -> str:
        if not self._values:
            return self._no_records_msg(use_ansi_coloring)

        defaults = self._defaults
        layout = self._layout
        border_width = self._border_width

        available_lines = min(available_lines, defaults.max_completion_height)
        inner_lines = _sub(available_lines, border_width)
        skip_values = (
            self._selected - inner_lines + 1 if self._selected >= inner_lines else 0
        )

        max_padding = (
            _sub(
                layout.completion_width,
                min(self._longest_suggestion, _UNBOUNDED) + border_width,
            )
            // 2
        )
        padding = min(defaults.padding, max_padding)

        shown = self._values[skip_values : skip_values + inner_lines]
        strings = [
            self._create_value_string(suggestion, index, use_ansi_coloring, padding)
            for index, suggestion in enumerate(shown, start=skip_values)
        ]

        border = defaults.border
        if border is not None:
            horizontal = border.horizontal * _sub(layout.completion_width, 2)
            strings.insert(0, f"{border.top_left}{horizontal}{border.top_right}")
            strings.append(f"{border.bottom_left}{horizontal}{border.bottom_right}")

        description_height = min(available_lines, defaults.max_description_height)
        selected = self._selected_value()
        description_lines: list[str] = []
        if selected is not None and selected.description is not None:
            description_lines = self._create_description(
                selected.description,
                use_ansi_coloring,
                layout.description_width,
                description_height,
                layout.description_width,
            )

        distance_left = " " * layout.space_left
        offset = " " * layout.description_offset
        rows: list[str] = []
        for suggestion_line, description_line in zip_longest(strings, description_lines):
            if layout.description_is_right:
                if description_line is None:
                    rows.append(f"{distance_left}{suggestion_line}")
                elif suggestion_line is None:
                    indent = " " * (layout.completion_width + layout.description_offset)
                    rows.append(f"{indent}{distance_left}{description_line}")
                else:
                    rows.append(f"{distance_left}{suggestion_line}{offset}{description_line}")
            else:
                if description_line is None:
                    indent = " " * (layout.description_width + layout.description_offset)
                    rows.append(f"{indent}{distance_left}{suggestion_line}")
                elif suggestion_line is None:
                    rows.append(f"{distance_left}{description_line}")
                else:
                    rows.append(f"{distance_left}{description_line}{offset}{suggestion_line}")

        return "\r\n".join(rows)

    def set_cursor_pos(self, pos: tuple[int, int]) -> None:
        self._layout.cursor_col = pos[0]