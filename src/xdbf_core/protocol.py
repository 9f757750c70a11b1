"""XDBF protocol constants.

Single source of truth for magic values, record layouts and well-known ids.
All records are packed and big-endian.
"""
from enum import IntEnum

# Block magics
MAGIC_XDBF = b"XDBF"  # Container header
MAGIC_XSTR = b"XSTR"  # String table block
MAGIC_XACH = b"XACH"  # Achievements block
MAGIC_XSTC = b"XSTC"  # Locale configuration block

VERSION = 1

BYTE_ORDER = ">"

# Header: [Magic(4) | SlotCount(4) | UsedSlots(4) | FreeSlots(4)] = 16 bytes
HEADER_FMT = BYTE_ORDER + "4sIII"
HEADER_LEN = 16

# Directory entry: [Section(2) | Id(8) | Offset(4) | Size(4)] = 18 bytes
ENTRY_FMT = BYTE_ORDER + "HQII"
ENTRY_LEN = 18

# Free-list entry: [Offset(4) | Size(4)] = 8 bytes, opaque to the reader
FREE_ENTRY_FMT = BYTE_ORDER + "II"
FREE_ENTRY_LEN = 8

# String table: [Magic(4) | Ver(4) | Count(4)] then [Id(2) | Len(2) | bytes]
XSTR_HEADER_FMT = BYTE_ORDER + "4sII"
XSTR_HEADER_LEN = 12
XSTR_RECORD_FMT = BYTE_ORDER + "HH"
XSTR_RECORD_LEN = 4

# Achievements: [Magic(4) | Ver(4) | Count(4)] then fixed records
XACH_HEADER_FMT = BYTE_ORDER + "4sII"
XACH_HEADER_LEN = 12
# [Id | ImageId | Gamerscore | Flags](4 each) [Label | Desc | Unachieved](2 each)
XACH_RECORD_FMT = BYTE_ORDER + "IIIIHHH"
XACH_RECORD_LEN = 22

# Locale configuration: [Magic(4) | DefaultLanguage(4)]
XSTC_FMT = BYTE_ORDER + "4sI"
XSTC_LEN = 8


def tag_id(tag: bytes) -> int:
    """Widen a 4-byte ASCII tag to the numeric id used in the directory."""
    return int.from_bytes(tag, "big")


# Well-known ids
ID_TITLE = 0x8000  # title string id and title icon id
ID_XACH = tag_id(MAGIC_XACH)  # 0x58414348
ID_XSTC = tag_id(MAGIC_XSTC)  # 0x58535443


class Section(IntEnum):
    METADATA = 1
    IMAGE = 2
    STRING_TABLE = 3


class Locale(IntEnum):
    UNKNOWN = 0
    ENGLISH = 1
    JAPANESE = 2
    GERMAN = 3
    FRENCH = 4
    SPANISH = 5
    ITALIAN = 6
    KOREAN = 7
    CHINESE = 8


# Implicit default when a title carries no locale configuration block
DEFAULT_LOCALE = Locale.ENGLISH
