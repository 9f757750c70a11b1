"""XDBF Core - read-only decoding of title resource containers."""
from .protocol import Section, Locale, DEFAULT_LOCALE, ID_TITLE, ID_XACH, ID_XSTC
from .container import Block, Entry, XdbfContainer, open_container
from .strings import resolve_string, resolve_string_bytes, iter_string_records
from .achievements import Achievement, count_achievements, extract_achievements
from .game_data import XdbfGameData, open_game_data

__all__ = [
    "Section", "Locale", "DEFAULT_LOCALE", "ID_TITLE", "ID_XACH", "ID_XSTC",
    "Block", "Entry", "XdbfContainer", "open_container",
    "resolve_string", "resolve_string_bytes", "iter_string_records",
    "Achievement", "count_achievements", "extract_achievements",
    "XdbfGameData", "open_game_data",
]
