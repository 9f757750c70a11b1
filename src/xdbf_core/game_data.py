"""Game metadata facade: title, icon, default locale and achievements."""
from __future__ import annotations

import logging

from .achievements import Achievement, count_achievements, extract_achievements
from .container import Block, BytesLike, XdbfContainer, unpack_at
from .protocol import (
    DEFAULT_LOCALE,
    ID_TITLE,
    ID_XACH,
    ID_XSTC,
    MAGIC_XSTC,
    XSTC_FMT,
    XSTC_LEN,
    Locale,
    Section,
)
from .strings import resolve_string

logger = logging.getLogger(__name__)


class XdbfGameData(XdbfContainer):
    """Typed accessors over a title's XDBF resource container."""

    def default_locale(self) -> Locale:
        block = self.lookup(Section.METADATA, ID_XSTC)
        if block is None:
            return DEFAULT_LOCALE

        rec = unpack_at(block.data, XSTC_FMT, XSTC_LEN, 0)
        if rec is None or rec[0] != MAGIC_XSTC:
            logger.warning("Locale block is short or carries a bad magic, using %s", DEFAULT_LOCALE.name)
            return DEFAULT_LOCALE

        try:
            return Locale(rec[1])
        except ValueError:
            logger.warning("Unknown default language %d, using %s", rec[1], DEFAULT_LOCALE.name)
            return DEFAULT_LOCALE

    def string_table(self, locale: Locale | int) -> Block | None:
        return self.lookup(Section.STRING_TABLE, int(locale))

    def get_string(self, locale: Locale | int, string_id: int) -> str:
        return resolve_string(self.string_table(locale), string_id)

    def title(self) -> str:
        return self.get_string(self.default_locale(), ID_TITLE)

    def icon(self) -> Block | None:
        """Raw title icon bytes (normally PNG); decoding is up to the caller."""
        return self.lookup(Section.IMAGE, ID_TITLE)

    def achievement_count(self) -> int:
        return count_achievements(self.lookup(Section.METADATA, ID_XACH))

    def achievements(self, locale: Locale | int | None = None) -> list[Achievement]:
        if locale is None:
            locale = self.default_locale()
        return extract_achievements(
            self.lookup(Section.METADATA, ID_XACH),
            self.string_table(locale),
        )


def open_game_data(data: BytesLike | None) -> XdbfGameData:
    return XdbfGameData(data)
