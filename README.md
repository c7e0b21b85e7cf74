# menukit

Completion menus for terminal line editors. `menukit` takes suggestions from a
completer, lays them out for a screen of a given size, renders them as a string
and writes the chosen one back into an edit buffer.

## What is in the package

- `menukit.base` holds the shared types:
  - `Style` and `Color`, immutable text styles. `Style.prefix()` returns the
    ANSI escape sequence that turns the style on.
  - `MenuTextStyle`, the set of styles a menu uses.
  - `MenuEvent` and `MenuEventKind`, the events a menu reacts to. You can build
    them with `MenuEvent.activate()`, `MenuEvent.deactivate()`,
    `MenuEvent.edit()` or `MenuEvent(MenuEventKind.NEXT_ELEMENT)`.
  - `Span` and `Suggestion`, a completion candidate and the buffer range it
    replaces.
  - `Completer`, the abstract base class you subclass to supply suggestions.
  - `LineBuffer` and `Editor`, a line of text with a cursor and an undo history
    (`Editor.undo`, `Editor.redo`).
  - `ScreenSize`, `MenuSettings` and the abstract `Menu` class. `Menu` has
    chainable `with_*` builder methods for the name, the marker, the styles and
    `only_buffer_difference`.
- `menukit.columnar_menu.ColumnarMenu` shows suggestions in a grid. When any
  suggestion has a description, it switches to a single column so the
  description fits. It can be configured with `with_columns`,
  `with_column_width` and `with_column_padding`.
- `menukit.ide_menu.IdeMenu` shows one suggestion per line, placed at the
  cursor column set with `set_cursor_pos`. Next to the list it can show a
  description box. It can draw a border (`with_default_border`, `with_border`,
  `BorderSymbols`) and add padding. The description box goes on the left, on
  the right, or on the right when there is room (`DescriptionMode`).
- `menukit.grid.GridCursor` moves a selection over values laid out in rows and
  columns, wrapping at the edges.
- `menukit.menu_functions` holds the shared helpers:
  - `parse_selection_char` splits off a marker such as `!10` or `!-2`.
  - `string_difference` finds the text added to a string.
  - `completer_input` picks the text to pass to the completer.
  - `find_common_string` finds the prefix the suggestions share.
  - `replace_in_buffer` writes a suggestion into the editor.
  - `can_partially_complete` completes the shared prefix.
- `menukit.text_wrap` works by terminal column width and grapheme clusters:
  - `split_string` wraps text.
  - `truncate_string_list` replaces the tail of a list of lines with characters
    such as `...`.

## Installation

```
pip install menukit
```

## Usage

To supply suggestions, subclass `Completer` and implement `complete`:

```python
from menukit.base import Completer, Editor, MenuEvent, MenuEventKind, ScreenSize, Span, Suggestion
from menukit.columnar_menu import ColumnarMenu


class WordCompleter(Completer):
    def __init__(self, words):
        self.words = words

    def complete(self, line, pos):
        return [
            Suggestion(value=w, span=Span(0, pos))
            for w in self.words
            if w.startswith(line[:pos])
        ]


editor = Editor()
editor.set_buffer("bui")
completer = WordCompleter(["build.rs", "build-all.sh"])
screen = ScreenSize(width=80, height=24)

menu = ColumnarMenu().with_columns(3).with_name("files")

# The shared prefix "build" is completed directly in the buffer.
menu.can_partially_complete(False, editor, completer)

menu.menu_event(MenuEvent.activate())
menu.update_working_details(editor, completer, screen)
print(menu.menu_string(5, use_ansi_coloring=False))

menu.menu_event(MenuEvent(MenuEventKind.NEXT_ELEMENT))
menu.update_working_details(editor, completer, screen)
menu.replace_in_buffer(editor)
print(editor.buffer)
```

A menu only handles an event that was sent with `menu_event` when
`update_working_details` is next called. That call also recomputes the layout
for the given screen size.

Here is an IDE-style menu with a border and the description box on the right:

```python
from menukit.ide_menu import DescriptionMode, IdeMenu

menu = (
    IdeMenu()
    .with_default_border()
    .with_padding(1)
    .with_description_mode(DescriptionMode.RIGHT)
)
menu.set_cursor_pos((12, 0))
```

Colours are set with `Style` and `Color` through `with_text_style`,
`with_selected_text_style`, `with_description_text_style`,
`with_match_text_style` and `with_selected_match_text_style`. For example:

```python
from menukit.base import Color

menu.with_selected_text_style(Color.CYAN.bold())
```

When `menu_string` is called with `use_ansi_coloring=False`, the output has no
escape sequences. The selected entry is marked with `>` instead.

## What it does not do

`menukit` is not a line editor. It does not read keys, bind keys to menu
events, or draw anything on a terminal. `menu_string` returns text, and the
caller decides where to paint it. `Editor` is only a buffer with a cursor and
undo. It has no editing commands beyond replacing its contents. The package
also has no history-backed menu and no paged list menu. The only menus are
`ColumnarMenu` and `IdeMenu`.

## Running the tests

From a checkout of the project:

```
pip install -e ".[test]"
pytest
```