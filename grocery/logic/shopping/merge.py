"""Merge resolver: fold a candidate grocery item into the owner's active list.

merge_or_add(candidate, active_items, repository) either increments the
quantity of the matching active item or inserts the candidate as a new item.
Exactly one write reaches the repository per call.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.errors import InvalidArgument
from grocery.events.Event_Bus import EventBus
from grocery.events.event_helpers import publish_item_added, publish_item_merged
from grocery.logic.shopping.keys import item_key, keys_match
from grocery.utilities.dates import today_str

logger = logging.getLogger(__name__)

__all__ = ["validate_quantity", "find_match", "merge_or_add"]


def validate_quantity(quantity) -> float:
    """Quantities must be finite and non-negative; NaN and infinity are rejected."""
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise InvalidArgument(f"Quantity must be a number, got {quantity!r}")
    if not math.isfinite(quantity) or quantity < 0:
        raise InvalidArgument(f"Quantity must be finite and non-negative: {quantity}")
    return quantity


def _stored_order(item: GroceryItem):
    return (item.id is None, item.id or 0)


def find_match(candidate: GroceryItem, active_items: Iterable[GroceryItem]) -> Optional[GroceryItem]:
    """First (lowest id) active item of the candidate's owner whose key matches.

    Purchased items and other owners' items are never considered, even if the
    caller passes them in.
    """
    key = item_key(candidate)
    matches = [
        item for item in active_items
        if item.owner == candidate.owner and item.active and keys_match(item_key(item), key)
    ]
    if len(matches) > 1:
        logger.debug(f"{len(matches)} mergeable items for {key}; using the earliest stored")
    return min(matches, key=_stored_order) if matches else None


def merge_or_add(candidate: GroceryItem, active_items: Iterable[GroceryItem], repository, *,
                 today: Optional[str] = None, bus: Optional[EventBus] = None) -> GroceryItem:
    """Merge ``candidate`` into a matching active item or persist it as new.

    Args:
        candidate: item to add; its quantity must be non-negative.
        active_items: the owner's current active items.
        repository: grocery item store providing ``save(item)``.
        today: date stamped on new items that carry no ``date_added``.
        bus: event bus to announce the change on.

    Returns:
        The updated existing item, or the newly inserted candidate.
    """
    validate_quantity(candidate.quantity)
    if not (candidate.item_name or '').strip():
        raise InvalidArgument("Item name is required")

    existing = find_match(candidate, active_items)
    if existing is not None:
        existing.add_quantity(candidate.quantity)
        repository.save(existing)
        logger.debug(f"Merged {candidate.quantity} {candidate.unit} into item {existing.id} ({existing.item_name})")
        publish_item_merged(existing, candidate.quantity, bus)
        return existing

    if not candidate.date_added:
        candidate.date_added = today or today_str()
    candidate.id = None
    candidate.mark_unpurchased()
    repository.save(candidate)
    logger.debug(f"Added item {candidate.id} ({candidate.item_name})")
    publish_item_added(candidate, bus)
    return candidate
