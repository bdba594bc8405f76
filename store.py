from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

import pandas as pd

import db
from constants import STORAGE_KEY
from models import Record, record_from_dict, record_to_dict

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["name", "kind", "value", "unit", "city", "description", "lat", "lon"]


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


# Read / write the whole collection
def load_all() -> List[Record]:
    raw = db.get_value(STORAGE_KEY)
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored sensor collection is not valid JSON; treating as empty")
        return []
    if not isinstance(items, list):
        logger.warning("Stored sensor collection is not a list; treating as empty")
        return []
    return [record_from_dict(item) for item in items if isinstance(item, dict)]


def save_all(records: Iterable[Record]) -> None:
    payload = [record_to_dict(r) for r in records]
    db.set_value(STORAGE_KEY, json.dumps(payload, ensure_ascii=False))
    logger.debug("Saved %d sensor record(s)", len(payload))


# Pure operations on an in-memory list; callers persist the result.
def find_index(records: List[Record], name: str) -> Optional[int]:
    wanted = _normalize(name)
    for idx, record in enumerate(records):
        if _normalize(record.name) == wanted:
            return idx
    return None


def upsert(records: List[Record], candidate: Record) -> List[Record]:
    updated = list(records)
    idx = find_index(updated, candidate.name)
    if idx is None:
        updated.append(candidate)
        return updated
    # Name, kind and unit stay as first created.
    updated[idx] = replace(
        updated[idx],
        value=candidate.value,
        description=candidate.description,
        city=candidate.city,
        lat=candidate.lat,
        lon=candidate.lon,
    )
    return updated


def delete_at(records: List[Record], index: int) -> List[Record]:
    if not 0 <= index < len(records):
        raise IndexError(f"No sensor at position {index} (store has {len(records)}).")
    return records[:index] + records[index + 1 :]


def filter_by_city(records: Iterable[Record], city: Optional[str]) -> List[Record]:
    wanted = _normalize(city)
    if not wanted:
        return []
    return [r for r in records if r.city and _normalize(r.city) == wanted]


# Management list
def records_frame(records: Iterable[Record]) -> pd.DataFrame:
    rows = [
        {
            "name": r.name,
            "kind": r.kind.value,
            "value": r.value,
            "unit": r.unit,
            "city": r.city,
            "description": r.description,
            "lat": r.lat,
            "lon": r.lon,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def export_records_csv() -> str:
    return records_frame(load_all()).to_csv(index=False)
