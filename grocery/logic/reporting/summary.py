"""Dashboard summary and list orderings for an owner's grocery data."""
from __future__ import annotations
from datetime import date as _date
from typing import Any, Dict, List

from grocery.domain.GroceryItem import GroceryItem
from grocery.utilities.dates import parse_date

__all__ = ["newest_first", "active_items", "purchased_items", "summarize"]


def newest_first(items: List[GroceryItem], attribute: str) -> List[GroceryItem]:
    """Sort by a DD-MM-YYYY attribute, newest first; missing or malformed dates go last, ties by id."""
    def sort_key(item: GroceryItem):
        d = parse_date(getattr(item, attribute))
        return (d is None, -(d or _date.min).toordinal(), item.id or 0)
    return sorted(items, key=sort_key)


def active_items(owner, item_repository) -> List[GroceryItem]:
    return newest_first(item_repository.find_active_by_owner(owner), 'date_added')


def purchased_items(owner, item_repository) -> List[GroceryItem]:
    return newest_first(item_repository.find_purchased_by_owner(owner), 'date_purchased')


def summarize(owner, *, recipe_repository, meal_plan_repository, ingredient_repository,
              item_repository) -> Dict[str, Any]:
    return {
        'total_recipes': len(recipe_repository.find_all_by_owner(owner)),
        'total_meal_plans': len(meal_plan_repository.find_all_by_owner(owner)),
        'total_ingredients': len(ingredient_repository.find_all()),
        'active_items': len(item_repository.find_active_by_owner(owner)),
        'purchased_items': len(item_repository.find_purchased_by_owner(owner)),
    }
