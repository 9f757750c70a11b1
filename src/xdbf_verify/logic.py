import hashlib

from xdbf_core.achievements import read_achievements_header
from xdbf_core.container import FOUND, TRUNCATED, Entry, unpack_at
from xdbf_core.game_data import XdbfGameData
from xdbf_core.protocol import (
    HEADER_LEN,
    ID_TITLE,
    ID_XACH,
    ID_XSTC,
    MAGIC_XSTC,
    XACH_HEADER_LEN,
    XACH_RECORD_LEN,
    XSTC_FMT,
    XSTC_LEN,
    Section,
)
from xdbf_core.strings import (
    iter_string_records,
    read_string_table_header,
    resolve_string_bytes,
)
from .const import ERRORS


def _error(code: str, **detail) -> dict:
    return {"code": code, "message": ERRORS[code], **detail}


def _fail(errors: list) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def _section_name(section: int) -> str:
    try:
        return Section(section).name
    except ValueError:
        return str(section)


def _entry_key(entry: Entry) -> dict:
    return {"section": _section_name(entry.section), "id": f"{entry.id:#x}"}


def _check_content(entry: Entry, view: memoryview) -> list:
    """Format checks for the secondary blocks the reader knows how to decode."""
    errors = []
    if entry.section == Section.STRING_TABLE:
        count = read_string_table_header(view)
        if count is None:
            errors.append(_error("E_XSTR_HEADER", **_entry_key(entry)))
        else:
            seen = sum(1 for _ in iter_string_records(view))
            if seen != count:
                errors.append(_error("E_XSTR_TRUNCATED", declared=count, decoded=seen, **_entry_key(entry)))

    elif entry.section == Section.METADATA and entry.id == ID_XACH:
        count = read_achievements_header(view)
        if count is None:
            errors.append(_error("E_XACH_HEADER", **_entry_key(entry)))
        elif XACH_HEADER_LEN + count * XACH_RECORD_LEN > len(view):
            errors.append(_error("E_XACH_TRUNCATED", declared=count, **_entry_key(entry)))

    elif entry.section == Section.METADATA and entry.id == ID_XSTC:
        rec = unpack_at(view, XSTC_FMT, XSTC_LEN, 0)
        if rec is None or rec[0] != MAGIC_XSTC:
            errors.append(_error("E_XSTC_HEADER", **_entry_key(entry)))
    return errors


def verify_container(data) -> dict:
    container = XdbfGameData(data)
    if not container.is_valid:
        if len(container.data) < HEADER_LEN:
            return _fail([_error("E_HEADER_SHORT", size=len(container.data))])
        return _fail([_error("E_HEADER_MAGIC", magic=container.data[:4].hex())])

    errors = []
    if container.directory_truncated:
        errors.append(_error(
            "E_DIRECTORY_TRUNCATED",
            live=min(container.used_slot_count, container.slot_count),
            decoded=len(container.entries),
        ))

    for entry in container.entries:
        status, block = container.resolve_entry(entry)
        if status == TRUNCATED:
            errors.append(_error("E_BLOCK_TRUNCATED", offset=entry.offset, size=entry.size, **_entry_key(entry)))
            continue
        errors.extend(_check_content(entry, block.data))

    if errors:
        return _fail(errors)
    return {"status": "PASS", "error_count": 0, "errors": []}


def describe_container(data) -> dict:
    container = XdbfGameData(data)
    summary = {
        "valid": container.is_valid,
        "size": len(container.data),
        "slot_count": container.slot_count,
        "used_slot_count": container.used_slot_count,
        "free_slot_count": container.free_slot_count,
        "content_offset": container.content_offset,
        "entries": [],
    }
    if not container.is_valid:
        return summary

    for entry in container.entries:
        status, block = container.resolve_entry(entry)
        summary["entries"].append({
            **_entry_key(entry),
            "offset": entry.offset,
            "size": entry.size,
            "status": status,
            "content_hash": hashlib.sha256(block.data).hexdigest() if status == FOUND else None,
        })

    locale = container.default_locale()
    icon = container.icon()
    title = resolve_string_bytes(container.string_table(locale), ID_TITLE)
    summary.update({
        "default_locale": locale.name,
        "title": title.decode("utf-8", "replace"),
        "icon_size": icon.size if icon is not None else None,
        "achievement_count": container.achievement_count(),
    })
    return summary
