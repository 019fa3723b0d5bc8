"""Purchase state transitions for grocery items.

Active -> Purchased stamps date_purchased; Purchased -> Active clears it.
Batches are best-effort: ids that are unknown or owned by someone else are
skipped without error. Both transitions are idempotent (re-purchasing only
refreshes the date).
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from grocery.domain.GroceryItem import GroceryItem
from grocery.events.Event_Bus import EventBus
from grocery.events.event_helpers import publish_purchase_change
from grocery.utilities.dates import today_str

logger = logging.getLogger(__name__)

__all__ = ["mark_purchased", "mark_unpurchased"]


def mark_purchased(ids: Iterable, owner, item_repository, *, today: Optional[str] = None,
                   bus: Optional[EventBus] = None) -> List[GroceryItem]:
    ids = list(ids)
    stamp = today or today_str()
    items = item_repository.find_by_ids(ids, owner)
    for item in items:
        item.mark_purchased(stamp)
    item_repository.save_all(items)
    if len(items) < len(set(ids)):
        logger.debug(f"mark_purchased skipped {len(set(ids)) - len(items)} unknown or foreign ids")
    publish_purchase_change(owner, items, True, bus)
    return items


def mark_unpurchased(ids: Iterable, owner, item_repository, *,
                     bus: Optional[EventBus] = None) -> List[GroceryItem]:
    items = item_repository.find_by_ids(ids, owner)
    for item in items:
        item.mark_unpurchased()
    item_repository.save_all(items)
    publish_purchase_change(owner, items, False, bus)
    return items
