"""A completion menu that lays its suggestions out in columns."""

from __future__ import annotations

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
from menukit.grid import GridCursor
from menukit.menu_functions import can_partially_complete as _can_partially_complete
from menukit.menu_functions import completer_input
from menukit.menu_functions import replace_in_buffer as _replace_in_buffer

_NO_RECORDS = "NO RECORDS FOUND"


def _width(text: str) -> int:
    """Columns ``text`` takes on a terminal; control characters count as zero."""
    return sum(max(0, wcwidth(char)) for char in text)


def _pad(text: str, size: int) -> str:
    """Left-align ``text`` in a field of ``size`` characters."""
    return text + " " * max(size - len(text), 0)


def _one_line(description: str, limit: int) -> str:
    return description[:limit].replace("\n", " ")


class ColumnarMenu(Menu):
    """Menu presenting suggestions in columns, or one per line with descriptions."""

    def __init__(self, settings: MenuSettings | None = None) -> None:
        super().__init__(settings if settings is not None else MenuSettings(name="columnar_menu"))
        self._active = False
        self._default_columns = 4
        self._default_col_width: int | None = None
        self._col_padding = 2
        self._min_rows = 3
        self._col_width = 0
        self._shortest_base_string = ""
        self._values: list[Suggestion] = []
        self._cursor = GridCursor(columns=0)
        self._event: MenuEvent | None = None
        self._longest_suggestion = 0
        self._input: str | None = None

    # configuration

    def with_columns(self, columns: int) -> ColumnarMenu:
        self._default_columns = columns
        return self

    def with_column_width(self, col_width: int | None) -> ColumnarMenu:
        self._default_col_width = col_width
        return self

    def with_column_padding(self, col_padding: int) -> ColumnarMenu:
        self._col_padding = col_padding
        return self

    # layout helpers

    @property
    def _cols(self) -> int:
        return max(self._cursor.columns, 1)

    def _set_values(self, values: list[Suggestion]) -> None:
        self._values = list(values)
        self._cursor.size = len(self._values)

    def _selected(self) -> Suggestion | None:
        index = self._cursor.index()
        return self._values[index] if index < len(self._values) else None

    def _end_of_line(self, column: int) -> str:
        return "\r\n" if column == max(self._cols - 1, 0) else ""

    def _no_records_msg(self, use_ansi_coloring: bool) -> str:
        if use_ansi_coloring:
            return f"{self.settings.color.selected_text_style.prefix()}{_NO_RECORDS}{RESET}"
        return _NO_RECORDS

    def _create_string(
        self,
        suggestion: Suggestion,
        index: int,
        column: int,
        empty_space: int,
        use_ansi_coloring: bool,
    ) -> str:
        selected = index == self._cursor.index()
        eol = self._end_of_line(column)
        if use_ansi_coloring:
            return self._create_colored_string(suggestion, selected, eol, empty_space)

        marker = ">" if selected else ""
        if suggestion.description is not None:
            field_size = self._longest_suggestion + max(self._col_padding - _width(marker), 0)
            line = (
                f"{marker}{_pad(suggestion.value, field_size)}"
                f"{_one_line(suggestion.description, empty_space)}{eol}"
            )
        else:
            spaces = " " * max(empty_space - _width(marker), 0)
            line = f"{marker}{suggestion.value}{spaces}{eol}"
        return line.upper() if selected else line

    def _create_colored_string(
        self, suggestion: Suggestion, selected: bool, eol: str, empty_space: int
    ) -> str:
        color = self.settings.color
        match_len = _width(self._shortest_base_string)
        match_str = suggestion.value[:match_len]
        remaining_str = suggestion.value[match_len:]
        style_prefix = (suggestion.style or color.text_style).prefix()

        left_text_size = self._longest_suggestion + self._col_padding
        right_text_size = max(self._col_width - left_text_size, 0)
        max_remaining = max(left_text_size - _width(match_str), 0)
        max_match = max(max_remaining - _width(remaining_str), 0)
        spaces = " " * empty_space

        if selected:
            head = f"{style_prefix}{color.selected_match_style.prefix()}{match_str}{RESET}{style_prefix}"
            if suggestion.description is not None:
                description = _one_line(suggestion.description, right_text_size)
                return (
                    f"{head}{_pad(color.selected_text_style.prefix(), max_match)}"
                    f"{_pad(remaining_str, max_remaining)}{RESET}"
                    f"{color.description_style.prefix()}{color.selected_text_style.prefix()}"
                    f"{description}{RESET}{eol}"
                )
            return (
                f"{head}{color.selected_text_style.prefix()}{remaining_str}{RESET}"
                f"{spaces}{eol}"
            )

        head = f"{style_prefix}{color.match_style.prefix()}{match_str}{RESET}"
        if suggestion.description is not None:
            description = _one_line(suggestion.description, right_text_size)
            return (
                f"{head}{_pad(style_prefix, max_match)}{_pad(remaining_str, max_remaining)}"
                f"{RESET}{color.description_style.prefix()}{description}{RESET}{eol}"
            )
        return (
            f"{head}{style_prefix}{remaining_str}{RESET}"
            f"{color.description_style.prefix()}{spaces}{RESET}{eol}"
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
        self._set_values(values)
        buffer = editor.buffer
        self._shortest_base_string = min(
            (buffer[start:end] for start, end in base_ranges), key=_width, default=""
        )
        self._cursor.reset()

    def _handle_event(self, event: MenuEvent, editor: Editor, completer: Completer) -> None:
        kind = event.kind
        if kind is MenuEventKind.ACTIVATE:
            self._active = True
            self._cursor.reset()
            self._input = editor.buffer if self.settings.only_buffer_difference else None
            if not event.updated:
                self.update_values(editor, completer)
        elif kind is MenuEventKind.DEACTIVATE:
            self._active = False
        elif kind is MenuEventKind.EDIT:
            self._cursor.reset()
            if not event.updated:
                self.update_values(editor, completer)
        elif kind is MenuEventKind.NEXT_ELEMENT:
            self._cursor.move_next()
        elif kind is MenuEventKind.PREVIOUS_ELEMENT:
            self._cursor.move_previous()
        elif kind is MenuEventKind.MOVE_UP:
            self._cursor.move_up()
        elif kind is MenuEventKind.MOVE_DOWN:
            self._cursor.move_down()
        elif kind is MenuEventKind.MOVE_LEFT:
            self._cursor.move_left()
        elif kind is MenuEventKind.MOVE_RIGHT:
            self._cursor.move_right()
        # pages have no meaning in this menu

    def update_working_details(
        self, editor: Editor, completer: Completer, screen: ScreenSize
    ) -> None:
        if self._event is None:
            return
        event, self._event = self._event, None
        self._handle_event(event, editor, completer)

        # one column when any suggestion carries a description
        if any(suggestion.description is not None for suggestion in self._values):
            self._cursor.columns = 1
            self._col_width = screen.width
            self._longest_suggestion = max(
                (_width(suggestion.value) for suggestion in self._values), default=0
            )
            return

        max_width = max(
            (_width(suggestion.value) + self._col_padding for suggestion in self._values),
            default=0,
        )
        if self._default_col_width is not None:
            default_width = self._default_col_width
        else:
            default_width = screen.width // self._default_columns
        self._col_width = max(max_width, default_width)

        possible_cols = screen.width // self._col_width
        if possible_cols > self._default_columns:
            self._cursor.columns = max(self._default_columns, 1)
        else:
            self._cursor.columns = possible_cols

    def replace_in_buffer(self, editor: Editor) -> None:
        _replace_in_buffer(self._selected(), editor)

    def min_rows(self) -> int:
        return min(self._cursor.rows(), self._min_rows)

    def get_values(self) -> list[Suggestion]:
        return self._values

    def menu_required_lines(self, terminal_columns: int) -> int:
        return self._cursor.rows()

    def menu_string(self, available_lines: int, use_ansi_coloring: bool) -> str:
        if not self._values:
            return self._no_records_msg(use_ansi_coloring)

        cols = self._cols
        row = self._cursor.row
        skip_values = (row - available_lines + 1) * cols if row >= available_lines else 0
        available_values = available_lines * cols
        shown = self._values[skip_values : skip_values + available_values]
        return "".join(
            self._create_string(
                suggestion,
                index,
                index % cols,
                max(self._col_width - _width(suggestion.value), 0),
                use_ansi_coloring,
            )
            for index, suggestion in enumerate(shown, start=skip_values)
        )