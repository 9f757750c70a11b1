"""String table (XSTR) decoding."""
from __future__ import annotations

import logging
from typing import Iterator

from .container import Block, BytesLike, block_view, unpack_at
from .protocol import (
    MAGIC_XSTR,
    VERSION,
    XSTR_HEADER_FMT,
    XSTR_HEADER_LEN,
    XSTR_RECORD_FMT,
    XSTR_RECORD_LEN,
)

logger = logging.getLogger(__name__)


def read_string_table_header(view: memoryview | None) -> int | None:
    """Return the declared string count, or None if the block is not a valid XSTR."""
    if view is None:
        return None
    head = unpack_at(view, XSTR_HEADER_FMT, XSTR_HEADER_LEN, 0)
    if head is None:
        logger.warning("String table block of %d bytes has no room for a header", len(view))
        return None

    magic, ver, count = head
    if magic != MAGIC_XSTR:
        logger.warning("Bad string table magic %r", magic)
        return None
    if ver != VERSION:
        logger.warning("Unsupported string table version %d", ver)
        return None
    return count


def iter_string_records(block: Block | BytesLike | None) -> Iterator[tuple[int, bytes]]:
    """Yield (string_id, raw_bytes) in storage order.

    Stops at the first record that would run past the end of the block.
    """
    view = block_view(block)
    count = read_string_table_header(view)
    if count is None:
        return

    off = XSTR_HEADER_LEN
    for i in range(count):
        rec = unpack_at(view, XSTR_RECORD_FMT, XSTR_RECORD_LEN, off)
        if rec is None:
            logger.warning("String table truncated at record %d of %d", i, count)
            return
        string_id, length = rec
        off += XSTR_RECORD_LEN
        if off + length > len(view):
            logger.warning("String %#x declares %d bytes past the block end", string_id, length)
            return
        yield string_id, view[off:off + length].tobytes()
        off += length


def resolve_string_bytes(block: Block | BytesLike | None, string_id: int) -> bytes:
    """First record with `string_id` wins. Missing ids resolve to b""."""
    for sid, text in iter_string_records(block):
        if sid == string_id:
            return text
    return b""


def decode_text(raw: bytes) -> str:
    # surrogateescape keeps undecodable bytes recoverable via encode()
    return raw.decode("utf-8", "surrogateescape")


def resolve_string(block: Block | BytesLike | None, string_id: int) -> str:
    return decode_text(resolve_string_bytes(block, string_id))


def to_display(text: str) -> str:
    """Replace undecodable bytes so the text can be printed or serialized."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
