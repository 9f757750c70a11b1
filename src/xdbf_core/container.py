"""XDBF container reader.

The container is an immutable, borrowed view over a caller-owned buffer.
Every offset/length pair is checked against the buffer before a byte is read.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import NamedTuple, Union

from .protocol import (
    MAGIC_XDBF,
    HEADER_FMT,
    HEADER_LEN,
    ENTRY_FMT,
    ENTRY_LEN,
    FREE_ENTRY_LEN,
)

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

# Lookup outcomes
FOUND = "FOUND"
NOT_FOUND = "NOT_FOUND"
TRUNCATED = "TRUNCATED"
INVALID = "INVALID"


class Entry(NamedTuple):
    section: int
    id: int
    offset: int  # relative to the content region
    size: int


@dataclass(frozen=True)
class Block:
    """A resolved byte range inside the container buffer."""

    section: int
    id: int
    offset: int  # absolute offset into the container buffer
    size: int
    data: memoryview = field(repr=False, compare=False)

    def __bool__(self) -> bool:
        # a found block is truthy even when it holds zero bytes
        return True

    def __len__(self) -> int:
        return self.size

    def __bytes__(self) -> bytes:
        return self.data.tobytes()


def unpack_at(view: BytesLike, fmt: str, size: int, offset: int) -> tuple | None:
    """Unpack `fmt` at `offset`, or return None if it would run past the view."""
    if offset < 0 or offset + size > len(view):
        return None
    return struct.unpack_from(fmt, view, offset)


def block_view(block: Block | BytesLike | None) -> memoryview | None:
    """Normalize a Block or raw bytes-like into a memoryview. None stays None."""
    if block is None:
        return None
    if isinstance(block, Block):
        return block.data
    return memoryview(block)


class XdbfContainer:
    """Header, directory and content regions of one XDBF buffer.

    Construction never raises on malformed input. A buffer that is too short
    for the header or carries the wrong magic yields an invalid container,
    and every query on it returns None.
    """

    def __init__(self, data: BytesLike | None):
        self.data = memoryview(data if data is not None else b"").toreadonly()
        self.is_valid = False
        self.slot_count = 0
        self.used_slot_count = 0
        self.free_slot_count = 0
        self.content_offset = 0
        self.entries: tuple[Entry, ...] = ()
        self.directory_truncated = False

        self._parse()

    def _parse(self) -> None:
        header = unpack_at(self.data, HEADER_FMT, HEADER_LEN, 0)
        if header is None:
            logger.debug("Buffer of %d bytes is too short for an XDBF header", len(self.data))
            return

        magic, slot_count, used_slot_count, free_slot_count = header
        if magic != MAGIC_XDBF:
            logger.debug("Bad container magic %r", magic)
            return

        self.slot_count = slot_count
        self.used_slot_count = used_slot_count
        self.free_slot_count = free_slot_count

        # Header, then every directory slot, then the opaque free list.
        self.content_offset = (
            HEADER_LEN + slot_count * ENTRY_LEN + free_slot_count * FREE_ENTRY_LEN
        )

        live = min(used_slot_count, slot_count)
        entries: list[Entry] = []
        for i in range(live):
            rec = unpack_at(self.data, ENTRY_FMT, ENTRY_LEN, HEADER_LEN + i * ENTRY_LEN)
            if rec is None:
                self.directory_truncated = True
                logger.warning("Directory truncated after %d of %d live entries", i, live)
                break
            entries.append(Entry(*rec))

        self.entries = tuple(entries)
        self.is_valid = True

    def resolve_entry(self, entry: Entry) -> tuple[str, Block | None]:
        start = self.content_offset + entry.offset
        end = start + entry.size
        if end > len(self.data):
            logger.warning(
                "Entry (section=%d, id=%#x) spans %d..%d past buffer end %d",
                entry.section, entry.id, start, end, len(self.data),
            )
            return TRUNCATED, None
        return FOUND, Block(entry.section, entry.id, start, entry.size, self.data[start:end])

    def lookup_status(self, section: int, entry_id: int) -> tuple[str, Block | None]:
        """Find the first live entry keyed (section, entry_id), in directory order."""
        if not self.is_valid:
            return INVALID, None

        for entry in self.entries:
            if entry.section == section and entry.id == entry_id:
                return self.resolve_entry(entry)
        return NOT_FOUND, None

    def lookup(self, section: int, entry_id: int) -> Block | None:
        return self.lookup_status(section, entry_id)[1]


def open_container(data: BytesLike | None) -> XdbfContainer:
    return XdbfContainer(data)
