import pytest

from menukit.base import (
    RESET,
    Color,
    Completer,
    Editor,
    LineBuffer,
    Menu,
    MenuEvent,
    MenuEventKind,
    MenuSettings,
    MenuTextStyle,
    ScreenSize,
    Span,
    Style,
    Suggestion,
)


class _ListCompleter(Completer):
    def __init__(self, spans):
        self.spans = spans

    def complete(self, line, pos):
        return [Suggestion(value=f"v{i}", span=span) for i, span in enumerate(self.spans)]


class _StubMenu(Menu):
    def __init__(self):
        super().__init__(MenuSettings(name="stub"))
        self.active = False
        self.cursor = None

    def is_active(self):
        return self.active

    def menu_event(self, event):
        self.active = event.kind is MenuEventKind.ACTIVATE

    def can_quick_complete(self):
        return False

    def can_partially_complete(self, values_updated, editor, completer):
        return False

    def update_values(self, editor, completer):
        pass

    def update_working_details(self, editor, completer, screen):
        pass

    def replace_in_buffer(self, editor):
        pass

    def menu_required_lines(self, terminal_columns):
        return 1

    def menu_string(self, available_lines, use_ansi_coloring):
        return ""

    def min_rows(self):
        return 1

    def get_values(self):
        return []


def test_plain_style_has_empty_prefix():
    assert Style().prefix() == ""
    assert Style().paint("x") == "x"


def test_bold_green_prefix():
    assert Color.GREEN.bold().prefix() == "\x1b[1;32m"


def test_default_selected_style_prefix():
    assert MenuTextStyle().selected_text_style.prefix() == "\x1b[1;7;32m"


def test_paint_wraps_with_reset():
    style = Color.YELLOW.normal()
    painted = style.paint("abc")
    assert painted.startswith(style.prefix())
    assert painted.endswith(RESET)
    assert "abc" in painted


def test_style_builders_do_not_mutate():
    base = Color.RED.normal()
    underlined = base.underline()
    assert base.is_underline is False
    assert underlined.is_underline is True
    assert underlined.foreground is Color.RED


def test_background_precedes_foreground():
    style = Style().fg(Color.RED).on(Color.BLUE)
    prefix = style.prefix()
    assert prefix.index(Color.BLUE.background_code) < prefix.index(Color.RED.foreground_code)


def test_menu_event_constructors():
    assert MenuEvent.activate(True) == MenuEvent(MenuEventKind.ACTIVATE, True)
    assert MenuEvent.edit() == MenuEvent(MenuEventKind.EDIT, False)
    assert MenuEvent.deactivate().kind is MenuEventKind.DEACTIVATE


def test_suggestion_defaults():
    suggestion = Suggestion("value")
    assert suggestion.span == Span(0, 0)
    assert suggestion.description is None
    assert suggestion.append_whitespace is False


def test_complete_with_base_ranges_dedups_consecutive():
    completer = _ListCompleter([Span(0, 3), Span(0, 3), Span(1, 3), Span(0, 3)])
    suggestions, ranges = completer.complete_with_base_ranges("abc", 3)
    assert len(suggestions) == 4
    assert ranges == [(0, 3), (1, 3), (0, 3)]


def test_completer_is_abstract():
    with pytest.raises(TypeError):
        Completer()


def test_line_buffer_defaults_cursor_to_end():
    line = LineBuffer("hello")
    assert line.insertion_point == len("hello")


def test_line_buffer_replace_range_keeps_cursor():
    line = LineBuffer("foobar baz", 6)
    line.replace_range(3, 6, "bleh")
    assert line.buffer == "foobleh baz"
    assert line.insertion_point == 6


def test_line_buffer_replace_range_out_of_bounds():
    line = LineBuffer("abc")
    with pytest.raises(IndexError):
        line.replace_range(2, 10, "x")


def test_editor_set_buffer_moves_cursor_to_end():
    editor = Editor()
    editor.set_buffer("file1.txt`")
    assert editor.buffer == "file1.txt`"
    assert editor.is_cursor_at_buffer_end()


def test_editor_undo_restores_previous_line_buffer():
    editor = Editor()
    editor.set_line_buffer(LineBuffer("foobar baz", 6))
    editor.set_line_buffer(LineBuffer("foo baz", 3))
    editor.undo()
    assert editor.buffer == "foobar baz"
    assert editor.insertion_point == 6
    editor.redo()
    assert editor.buffer == "foo baz"


def test_editor_line_buffer_is_a_copy():
    editor = Editor()
    editor.set_buffer("abc")
    copy = editor.line_buffer
    copy.replace_range(0, 1, "z")
    assert editor.buffer == "abc"


def test_editor_undo_at_start_stays_empty():
    editor = Editor()
    editor.undo()
    assert editor.buffer == ""
    assert editor.is_cursor_at_buffer_end()


def test_screen_size_holds_values():
    screen = ScreenSize(width=80, height=24)
    assert (screen.width, screen.height) == (80, 24)


def test_menu_settings_defaults():
    settings = MenuSettings()
    assert settings.name == "menu"
    assert settings.marker == "| "
    assert settings.only_buffer_difference is False


def test_menu_builders_chain_and_apply():
    style = Color.CYAN.italic()
    menu = (
        _StubMenu()
        .with_name("testmenu")
        .with_marker("? ")
        .with_only_buffer_difference(True)
        .with_text_style(style)
        .with_selected_text_style(style)
        .with_description_text_style(style)
        .with_match_text_style(style)
        .with_selected_match_text_style(style)
    )
    assert menu.name == "testmenu"
    assert menu.indicator == "? "
    assert menu.settings.only_buffer_difference is True
    colors = menu.settings.color
    assert {
        colors.text_style,
        colors.selected_text_style,
        colors.description_style,
        colors.match_style,
        colors.selected_match_style,
    } == {style}


def test_menu_settings_are_independent_per_menu():
    first = _StubMenu().with_text_style(Color.RED.normal())
    second = _StubMenu()
    assert second.settings.color.text_style == MenuTextStyle().text_style
    assert first.settings.color.text_style.foreground is Color.RED


def test_menu_is_abstract():
    with pytest.raises(TypeError):
        Menu()


def test_set_cursor_pos_default_changes_nothing():
    menu = _StubMenu()
    menu.set_cursor_pos((5, 2))
    menu.menu_event(MenuEvent.activate())
    assert menu.is_active() is True
    assert menu.cursor is None