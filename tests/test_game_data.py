from xdbf_core import ID_TITLE, ID_XSTC, Locale, Section, XdbfGameData, open_game_data
from xdbf_core.protocol import DEFAULT_LOCALE

from xdbf_builder import container, halo3, xstc, xstr


def test_title_from_default_locale():
    game = open_game_data(halo3())
    assert game.default_locale() == Locale.GERMAN
    assert game.title() == "Halo 3"


def test_missing_locale_block_falls_back():
    game = XdbfGameData(container([
        (Section.STRING_TABLE, Locale.ENGLISH, xstr([(ID_TITLE, "Halo 3")])),
    ]))
    assert game.default_locale() == DEFAULT_LOCALE == Locale.ENGLISH
    assert game.title() == "Halo 3"


def test_bad_locale_block_falls_back():
    game = XdbfGameData(container([
        (Section.METADATA, ID_XSTC, xstc(Locale.GERMAN, magic=b"XSTR")),
    ]))
    assert game.default_locale() == Locale.ENGLISH

    game = XdbfGameData(container([(Section.METADATA, ID_XSTC, b"XSTC")]))
    assert game.default_locale() == Locale.ENGLISH


def test_unknown_language_falls_back():
    game = XdbfGameData(container([(Section.METADATA, ID_XSTC, xstc(42))]))
    assert game.default_locale() == Locale.ENGLISH


def test_title_empty_without_table_or_id():
    game = XdbfGameData(container([(Section.METADATA, ID_XSTC, xstc(Locale.FRENCH))]))
    assert game.title() == ""

    game = XdbfGameData(container([(Section.STRING_TABLE, Locale.ENGLISH, xstr([(1, "x")]))]))
    assert game.title() == ""


def test_icon_is_raw_block():
    game = open_game_data(halo3())
    icon = game.icon()
    assert icon is not None
    assert bytes(icon) == b"\x89PNG\r\n\x1a\nicon"
    assert XdbfGameData(container([])).icon() is None


def test_get_string_by_locale():
    game = open_game_data(halo3())
    assert game.get_string(Locale.ENGLISH, 1) == "Finish the Fight"
    assert game.get_string(Locale.GERMAN, 1) == "Beende den Kampf"
    assert game.get_string(Locale.JAPANESE, 1) == ""


def test_achievements_use_default_locale():
    game = open_game_data(halo3())
    assert game.achievement_count() == 1
    assert [a.label for a in game.achievements()] == ["Beende den Kampf"]
    assert [a.label for a in game.achievements(Locale.ENGLISH)] == ["Finish the Fight"]
    # no table for the requested locale: records survive with empty text
    (ach,) = game.achievements(Locale.KOREAN)
    assert ach.label == ""
    assert ach.gamerscore == 50


def test_no_achievements_block():
    game = XdbfGameData(container([]))
    assert game.achievement_count() == 0
    assert game.achievements() == []
