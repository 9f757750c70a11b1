import struct

from xdbf_core import Section, open_container, resolve_string, resolve_string_bytes, iter_string_records
from xdbf_core.protocol import MAGIC_XACH, XSTR_RECORD_FMT
from xdbf_core.strings import to_display

from xdbf_builder import container, xstr

HELLO_WORLD = xstr([(1, "Hello"), (2, "World")])


def test_resolve_hello_world():
    assert resolve_string(HELLO_WORLD, 1) == "Hello"
    assert resolve_string(HELLO_WORLD, 2) == "World"
    assert resolve_string(HELLO_WORLD, 3) == ""


def test_resolve_through_container_block():
    c = open_container(container([(Section.STRING_TABLE, 1, HELLO_WORLD)]))
    block = c.lookup(Section.STRING_TABLE, 1)
    assert resolve_string(block, 2) == "World"


def test_resolution_is_idempotent():
    first = resolve_string(HELLO_WORLD, 2)
    assert all(resolve_string(HELLO_WORLD, 2) == first for _ in range(5))


def test_records_in_storage_order():
    table = xstr([(9, "nine"), (3, "three"), (9, "again")])
    assert list(iter_string_records(table)) == [(9, b"nine"), (3, b"three"), (9, b"again")]
    assert resolve_string(table, 9) == "nine"


def test_empty_string_record():
    table = xstr([(1, ""), (2, "x")])
    assert resolve_string(table, 1) == ""
    assert resolve_string(table, 2) == "x"


def test_missing_block_resolves_empty():
    assert resolve_string(None, 1) == ""
    assert resolve_string_bytes(None, 1) == b""


def test_bad_magic_or_version_is_not_found():
    assert resolve_string(xstr([(1, "Hello")], magic=MAGIC_XACH), 1) == ""
    assert resolve_string(xstr([(1, "Hello")], version=2), 1) == ""
    assert resolve_string(b"XST", 1) == ""


def test_record_running_past_block_end():
    table = xstr([(1, "Hello"), (2, "World")])
    # cut inside the second record's text
    cut = table[:-2]
    assert resolve_string(cut, 1) == "Hello"
    assert resolve_string(cut, 2) == ""
    assert list(iter_string_records(cut)) == [(1, b"Hello")]


def test_declared_length_past_block_end():
    table = xstr([(1, "Hi")]) + struct.pack(XSTR_RECORD_FMT, 2, 0xFFFF) + b"abc"
    table = table[:8] + struct.pack(">I", 2) + table[12:]
    assert resolve_string(table, 1) == "Hi"
    assert resolve_string(table, 2) == ""


def test_declared_count_larger_than_records():
    table = xstr([(1, "Hello")], count=1000)
    assert resolve_string(table, 1) == "Hello"
    assert resolve_string(table, 2) == ""


def test_raw_bytes_survive():
    raw = b"caf\xe9 \xff"
    table = xstr([(5, raw)])
    assert resolve_string_bytes(table, 5) == raw
    text = resolve_string(table, 5)
    assert text.encode("utf-8", "surrogateescape") == raw
    assert to_display(text) == "caf\ufffd \ufffd"


def test_utf8_text():
    table = xstr([(0x8000, "ヘイロー 3")])
    assert resolve_string(table, 0x8000) == "ヘイロー 3"
