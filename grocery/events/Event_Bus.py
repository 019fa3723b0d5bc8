"""Simple Event Bus / Observer implementation for grocery engine changes.

Event names:
  grocery.item_added     -> payload {"item": GroceryItem}
  grocery.item_merged    -> payload {"item": GroceryItem, "added_quantity": float}
  grocery.purchased      -> payload {"owner": owner, "items": [GroceryItem]}
  grocery.unpurchased    -> payload {"owner": owner, "items": [GroceryItem]}
  grocery.list_saved     -> payload {"grocery_list": GroceryList}
  recipe.rescaled        -> payload {"recipe": Recipe, "old_servings": int|None, "factor": float}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[str, Any], None]

# --- Event name constants (used across modules) ---
GROCERY_ITEM_ADDED = "grocery.item_added"
GROCERY_ITEM_MERGED = "grocery.item_merged"
GROCERY_PURCHASED = "grocery.purchased"
GROCERY_UNPURCHASED = "grocery.unpurchased"
GROCERY_LIST_SAVED = "grocery.list_saved"
RECIPE_RESCALED = "recipe.rescaled"


class EventBus:
	"""Synchronous dispatcher.

	publish() calls every subscriber in subscription order before returning, so
	listeners run inside the engine call (and its store transaction) that raised
	the event. A listener that fails is logged and skipped.
	"""

	def __init__(self):
		self._subscribers: Dict[str, List[Callback]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Optional[Callback] = None):
		"""Register a listener; without ``callback`` returns a decorator."""
		if callback is None:
			return lambda fn: self.subscribe(event_name, fn)
		listeners = self._subscribers[event_name]
		if callback not in listeners:
			listeners.append(callback)
		return callback

	def unsubscribe(self, event_name: str, callback: Callback) -> bool:
		listeners = self._subscribers.get(event_name, [])
		if callback in listeners:
			listeners.remove(callback)
			return True
		return False

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every listener; returns how many handled it without raising."""
		delivered = 0
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception(f"Listener {cb!r} failed on {event_name}")
				continue
			delivered += 1
		return delivered


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'GROCERY_ITEM_ADDED', 'GROCERY_ITEM_MERGED', 'GROCERY_PURCHASED', 'GROCERY_UNPURCHASED',
	'GROCERY_LIST_SAVED', 'RECIPE_RESCALED',
]
