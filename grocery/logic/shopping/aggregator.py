"""Aggregate recipe ingredient lines into grocery items.

Recipes are taken either directly (by id) or through the entries of meal
plans. Lines are folded by merge key in first-seen order, and every folded
candidate is then merged into the owner's active grocery list.

All ids are resolved before anything is written: an unknown id (or one that
belongs to another owner) raises NotFound and leaves the list untouched.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.MealPlan import MealPlan
from grocery.domain.Recipe import Recipe, RecipeIngredient
from grocery.domain.errors import NotFound
from grocery.events.Event_Bus import EventBus
from grocery.logic.shopping.keys import MergeKey, normalize
from grocery.logic.shopping.merge import merge_or_add

logger = logging.getLogger(__name__)

__all__ = [
    "resolve_recipes", "resolve_meal_plans", "recipe_lines", "meal_plan_recipes",
    "fold_lines", "merge_candidates", "aggregate_from_recipes", "aggregate_from_meal_plans",
]


def resolve_recipes(recipe_ids: Iterable, owner, recipe_repository) -> List[Recipe]:
    """One recipe per id, duplicates included, in input order."""
    recipes = []
    for recipe_id in recipe_ids:
        recipe = recipe_repository.find_by_id(recipe_id, owner)
        if recipe is None:
            raise NotFound(f"Recipe not found or doesn't belong to user: {recipe_id}")
        recipes.append(recipe)
    return recipes


def resolve_meal_plans(meal_plan_ids: Iterable, owner, meal_plan_repository) -> List[MealPlan]:
    meal_plans = []
    for meal_plan_id in meal_plan_ids:
        meal_plan = meal_plan_repository.find_by_id(meal_plan_id, owner)
        if meal_plan is None:
            raise NotFound(f"Meal Plan not found or doesn't belong to user: {meal_plan_id}")
        meal_plans.append(meal_plan)
    return meal_plans


def meal_plan_recipes(meal_plans: Iterable[MealPlan]) -> Iterator[Recipe]:
    # Each entry contributes its recipe once, even when several entries share it
    for meal_plan in meal_plans:
        yield from meal_plan.recipes()


def recipe_lines(recipes: Iterable[Recipe]) -> Iterator[RecipeIngredient]:
    """Ingredient lines of every recipe; lines with no resolved ingredient are skipped."""
    for recipe in recipes:
        for line in recipe.ingredients:
            if line.ingredient is None:
                continue
            yield line


def fold_lines(lines: Iterable[RecipeIngredient], date: Optional[str], owner) -> List[GroceryItem]:
    """Sum quantities of lines sharing a merge key, keeping first-seen order."""
    folded: Dict[MergeKey, GroceryItem] = {}
    for line in lines:
        name = line.display_name
        key = normalize(name, line.unit, line.note)
        candidate = folded.get(key)
        if candidate is None:
            folded[key] = GroceryItem(
                item_name=name,
                unit=line.unit,
                quantity=line.quantity,
                note=line.note,
                date_added=date,
                purchased=False,
                owner=owner,
            )
        else:
            candidate.add_quantity(line.quantity)
    return list(folded.values())


def merge_candidates(candidates: List[GroceryItem], owner, item_repository, *,
                     today: Optional[str] = None, bus: Optional[EventBus] = None) -> List[GroceryItem]:
    """Merge every candidate into the owner's active list, in order.

    Matching active items are re-read for each candidate so items inserted
    earlier in the same batch are visible to later ones.
    """
    results = []
    for candidate in candidates:
        active = item_repository.find_merge_candidates(candidate.item_name, candidate.unit, candidate.note, owner)
        results.append(merge_or_add(candidate, active, item_repository, today=today, bus=bus))
    # Several candidates can land on the same stored item; report its final state everywhere
    latest = {item.id: item for item in results}
    return [latest[item.id] for item in results]


def aggregate_from_recipes(recipe_ids: Iterable, date: Optional[str], owner, *,
                           recipe_repository, item_repository,
                           today: Optional[str] = None, bus: Optional[EventBus] = None) -> List[GroceryItem]:
    recipes = resolve_recipes(recipe_ids, owner, recipe_repository)
    candidates = fold_lines(recipe_lines(recipes), date, owner)
    logger.debug(f"{len(recipes)} recipes folded into {len(candidates)} candidates for owner {owner}")
    return merge_candidates(candidates, owner, item_repository, today=today, bus=bus)


def aggregate_from_meal_plans(meal_plan_ids: Iterable, date: Optional[str], owner, *,
                              meal_plan_repository, item_repository,
                              today: Optional[str] = None, bus: Optional[EventBus] = None) -> List[GroceryItem]:
    meal_plans = resolve_meal_plans(meal_plan_ids, owner, meal_plan_repository)
    candidates = fold_lines(recipe_lines(meal_plan_recipes(meal_plans)), date, owner)
    logger.debug(f"{len(meal_plans)} meal plans folded into {len(candidates)} candidates for owner {owner}")
    return merge_candidates(candidates, owner, item_repository, today=today, bus=bus)
