"""Completion menus for terminal line editors: columnar and IDE-style menus with their helpers."""

__version__ = "0.1.0"
__all__ = ["base", "menu_functions", "text_wrap", "grid", "columnar_menu", "ide_menu"]