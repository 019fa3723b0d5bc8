"""Merge keys for grocery items.

Two items describe "the same thing to buy" when their trimmed, lower-cased
names and units are equal and their notes are compatible: an empty or missing
note matches any note, two non-empty notes must be equal. Units are compared
literally; there is no unit conversion.
"""
from typing import NamedTuple, Optional


class MergeKey(NamedTuple):
    name: str
    unit: str
    note: str


def _normalize(value: Optional[str]) -> str:
    return (value or '').strip().lower()


def normalize(name: Optional[str], unit: Optional[str], note: Optional[str] = None) -> MergeKey:
    """Canonical key; a missing note and an empty note normalize to the same value."""
    return MergeKey(_normalize(name), _normalize(unit), _normalize(note))


def notes_match(a: str, b: str) -> bool:
    return not a or not b or a == b


def keys_match(a: MergeKey, b: MergeKey) -> bool:
    return a.name == b.name and a.unit == b.unit and notes_match(a.note, b.note)


def item_key(item) -> MergeKey:
    """Key of anything exposing item_name/unit/note (grocery items and candidates)."""
    return normalize(item.item_name, item.unit, item.note)


__all__ = ['MergeKey', 'normalize', 'notes_match', 'keys_match', 'item_key']
