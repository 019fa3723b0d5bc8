"""Grocery list snapshot builder.

Builds named, dated GroceryList snapshots from a meal plan or a set of
recipes. Unlike the grocery items produced by the aggregator, a snapshot does
not touch the owner's active list: entries are summed per (ingredient, unit)
and the list is only persisted when explicitly saved.
"""
from typing import Dict, Iterable, List, Optional, Tuple

from grocery.domain.GroceryList import GroceryList, GroceryListEntry
from grocery.domain.MealPlan import MealPlan
from grocery.domain.Recipe import Recipe
from grocery.domain.errors import InvalidArgument
from grocery.logic.shopping.aggregator import meal_plan_recipes, recipe_lines


def _normalize(value: Optional[str]) -> str:
    return (value or '').strip().lower()


def build_entries(recipes: Iterable[Recipe]) -> List[GroceryListEntry]:
    """Sum recipe lines by ingredient id and unit, in first-seen order."""
    entries: Dict[Tuple[int, str], GroceryListEntry] = {}
    for line in recipe_lines(recipes):
        ingredient = line.ingredient
        unit = line.unit or ingredient.unit
        k = (ingredient.id, _normalize(unit))
        entry = entries.get(k)
        if entry is None:
            entries[k] = GroceryListEntry(
                ingredient_id=ingredient.id,
                ingredient_name=ingredient.name,
                unit=unit,
                quantity=line.quantity,
            )
        else:
            entry.quantity += line.quantity
    return list(entries.values())


def build_entries_from_meal_plan(meal_plan: MealPlan) -> List[GroceryListEntry]:
    return build_entries(meal_plan_recipes([meal_plan]))


def build_entries_from_recipes(recipes: Iterable[Recipe]) -> List[GroceryListEntry]:
    return build_entries(recipes)


def build_grocery_list(name: str, date: str, entries: List[GroceryListEntry], owner,
                       meal_plan_id: Optional[int] = None) -> GroceryList:
    return GroceryList(name=name, date=date, entries=entries, owner=owner, meal_plan_id=meal_plan_id)


def validate_for_save(grocery_list: GroceryList) -> None:
    """Reject snapshots that cannot be saved: blank name or no entries."""
    if not (grocery_list.name or '').strip():
        raise InvalidArgument("Grocery list name is required")
    if not grocery_list.entries:
        raise InvalidArgument("Grocery list must have at least one entry")


__all__ = [
    'build_entries', 'build_entries_from_meal_plan', 'build_entries_from_recipes',
    'build_grocery_list', 'validate_for_save',
]
