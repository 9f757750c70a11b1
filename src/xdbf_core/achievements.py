"""Achievement (XACH) decoding joined against a string table."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .container import Block, BytesLike, block_view, unpack_at
from .protocol import (
    MAGIC_XACH,
    VERSION,
    XACH_HEADER_FMT,
    XACH_HEADER_LEN,
    XACH_RECORD_FMT,
    XACH_RECORD_LEN,
)
from .strings import resolve_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: int
    image_id: int
    gamerscore: int
    flags: int
    label: str
    description: str
    unachieved_description: str


def read_achievements_header(view: memoryview | None) -> int | None:
    if view is None:
        return None
    head = unpack_at(view, XACH_HEADER_FMT, XACH_HEADER_LEN, 0)
    if head is None:
        logger.warning("Achievements block of %d bytes has no room for a header", len(view))
        return None

    magic, ver, count = head
    if magic != MAGIC_XACH:
        logger.warning("Bad achievements magic %r", magic)
        return None
    if ver != VERSION:
        logger.warning("Unsupported achievements version %d", ver)
        return None
    return count


def count_achievements(xach_block: Block | BytesLike | None) -> int:
    """Declared achievement count, 0 if the block is absent or invalid."""
    count = read_achievements_header(block_view(xach_block))
    return count or 0


def extract_achievements(
    xach_block: Block | BytesLike | None,
    xstr_block: Block | BytesLike | None,
) -> list[Achievement]:
    """Decode every achievement record in storage order.

    Texts missing from the string table come back as "". Records that would
    run past the end of the achievements block are not decoded.
    """
    view = block_view(xach_block)
    count = read_achievements_header(view)
    if not count:
        return []

    out: list[Achievement] = []
    for i in range(count):
        rec = unpack_at(view, XACH_RECORD_FMT, XACH_RECORD_LEN, XACH_HEADER_LEN + i * XACH_RECORD_LEN)
        if rec is None:
            logger.warning("Achievements block truncated at record %d of %d", i, count)
            break
        ach_id, image_id, gamerscore, flags, label_id, desc_id, unach_id = rec
        out.append(
            Achievement(
                id=ach_id,
                image_id=image_id,
                gamerscore=gamerscore,
                flags=flags,
                label=resolve_string(xstr_block, label_id),
                description=resolve_string(xstr_block, desc_id),
                unachieved_description=resolve_string(xstr_block, unach_id),
            )
        )
    return out
