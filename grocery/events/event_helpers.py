"""Event helper utilities.

Helper functions for publishing grocery engine events. Each takes the bus to
publish on, defaulting to the global one.

Quick import:
    from grocery.events.event_helpers import (
        publish_item_added, publish_item_merged, publish_purchase_change,
        publish_list_saved, publish_recipe_rescaled,
    )
"""
from __future__ import annotations
from typing import Any, Iterable, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    GROCERY_ITEM_ADDED, GROCERY_ITEM_MERGED, GROCERY_PURCHASED, GROCERY_UNPURCHASED,
    GROCERY_LIST_SAVED, RECIPE_RESCALED,
)

__all__ = [
    'publish_item_added', 'publish_item_merged', 'publish_purchase_change',
    'publish_list_saved', 'publish_recipe_rescaled',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_item_added(item: Any, bus: Optional[EventBus] = None):
    """Publish a grocery.item_added event."""
    _bus(bus).publish(GROCERY_ITEM_ADDED, {'item': item})


def publish_item_merged(item: Any, added_quantity: float, bus: Optional[EventBus] = None):
    """Publish a grocery.item_merged event."""
    _bus(bus).publish(GROCERY_ITEM_MERGED, {
        'item': item,
        'added_quantity': added_quantity,
    })


def publish_purchase_change(owner: Any, items: Iterable[Any], purchased: bool,
                            bus: Optional[EventBus] = None):
    """Publish grocery.purchased or grocery.unpurchased for a batch of items.

    Nothing is published for an empty batch.
    """
    items_list = list(items)
    if not items_list:
        return
    event = GROCERY_PURCHASED if purchased else GROCERY_UNPURCHASED
    _bus(bus).publish(event, {'owner': owner, 'items': items_list})


def publish_list_saved(grocery_list: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(GROCERY_LIST_SAVED, {'grocery_list': grocery_list})


def publish_recipe_rescaled(recipe: Any, old_servings, factor: float, bus: Optional[EventBus] = None):
    _bus(bus).publish(RECIPE_RESCALED, {
        'recipe': recipe,
        'old_servings': old_servings,
        'factor': factor,
    })
