from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from xdbf_core.container import FOUND
from xdbf_core.game_data import XdbfGameData
from xdbf_core.protocol import Locale
from xdbf_core.strings import to_display

logger = logging.getLogger(__name__)

ENTRIES_SCHEMA = pa.schema(
    [
        ("section", pa.int32()),
        ("id", pa.uint64()),
        ("offset", pa.int64()),
        ("size", pa.int64()),
        ("status", pa.string()),
        ("content_hash", pa.string()),
    ]
)

ACHIEVEMENTS_SCHEMA = pa.schema(
    [
        ("id", pa.int64()),
        ("image_id", pa.int64()),
        ("gamerscore", pa.int64()),
        ("flags", pa.int64()),
        ("label", pa.string()),
        ("description", pa.string()),
        ("unachieved_description", pa.string()),
    ]
)


def _write_table(rows: list[dict], schema: pa.Schema, path: Path) -> bool:
    if not rows:
        return False
    df = pd.DataFrame(rows)
    pq.write_table(pa.Table.from_pandas(df, schema=schema, preserve_index=False), path)
    return True


def entry_rows(game: XdbfGameData) -> list[dict]:
    rows: list[dict] = []
    for entry in game.entries:
        status, block = game.resolve_entry(entry)
        rows.append(
            {
                "section": int(entry.section),
                "id": int(entry.id),
                "offset": int(entry.offset),
                "size": int(entry.size),
                "status": status,
                "content_hash": hashlib.sha256(block.data).hexdigest() if status == FOUND else None,
            }
        )
    return rows


def achievement_rows(game: XdbfGameData, locale: Locale | None = None) -> list[dict]:
    return [
        {
            "id": a.id,
            "image_id": a.image_id,
            "gamerscore": a.gamerscore,
            "flags": a.flags,
            "label": to_display(a.label),
            "description": to_display(a.description),
            "unachieved_description": to_display(a.unachieved_description),
        }
        for a in game.achievements(locale)
    ]


def export_container(data: bytes, out_path: Path, locale: Locale | None = None) -> dict:
    """Write entries.parquet, achievements.parquet and icon.bin into out_path.

    Tables with no rows are not written. Raises ValueError for an invalid container.
    """
    game = XdbfGameData(data)
    if not game.is_valid:
        raise ValueError("Not an XDBF container")

    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    entries = entry_rows(game)
    achievements = achievement_rows(game, locale)
    _write_table(entries, ENTRIES_SCHEMA, out_path / "entries.parquet")
    _write_table(achievements, ACHIEVEMENTS_SCHEMA, out_path / "achievements.parquet")

    icon = game.icon()
    if icon is not None:
        (out_path / "icon.bin").write_bytes(bytes(icon))
    else:
        logger.info("Container has no title icon")

    return {
        "title": to_display(game.title()),
        "entries": len(entries),
        "achievements": len(achievements),
        "icon_size": icon.size if icon is not None else None,
    }
