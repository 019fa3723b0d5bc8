"""GroceryService: the engine's entry point for callers (controllers, scripts, tests).

Every public operation takes the owner explicitly and runs as one unit of
work inside ``storage.transaction()``: reads and the writes that depend on
them happen under the store's lock, and a failure rolls the whole call back.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.GroceryList import GroceryList
from grocery.domain.Ingredient import Ingredient
from grocery.domain.MealPlan import MealPlan
from grocery.domain.Recipe import Recipe
from grocery.domain.errors import InvalidArgument, NotFound
from grocery.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from grocery.events.event_helpers import publish_list_saved
from grocery.infra.Grocery_Repository import GroceryItemRepository, GroceryListRepository
from grocery.infra.Plan_Repository import MealPlanRepository
from grocery.infra.Recipe_Repository import IngredientRepository, RecipeRepository
from grocery.infra.store import Storage
from grocery.logic.recipes import catalog, scaling
from grocery.logic.reporting import summary
from grocery.logic.shopping import aggregator, list_builder, merge, purchases
from grocery.utilities import config
from grocery.utilities.dates import today_str
from grocery.utilities.validators import (
    GenerateFromMealPlansRequest,
    GenerateFromRecipesRequest,
    GroceryItemInput,
    GroceryListRequest,
    PurchaseRequest,
    ServingsUpdateRequest,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def validate_request(model: Type[M], data: Any) -> M:
    """Parse a boundary payload; pydantic failures surface as InvalidArgument."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected {model.__name__}: {e.error_count()} validation error(s)")
        raise InvalidArgument(str(e)) from e


class GroceryService:
    def __init__(self, storage: Optional[Storage] = None, *, bus: Optional[EventBus] = None,
                 clock: Callable[[], str] = today_str, strict_servings: Optional[bool] = None):
        self.storage = storage if storage is not None else Storage(config.STORE_FILE)
        self.ingredients = IngredientRepository(self.storage)
        self.recipes = RecipeRepository(self.storage)
        self.meal_plans = MealPlanRepository(self.storage)
        self.items = GroceryItemRepository(self.storage)
        self.lists = GroceryListRepository(self.storage)
        self.bus = bus if bus is not None else GLOBAL_EVENT_BUS
        self._clock = clock
        self._strict_servings = strict_servings

    def today(self) -> str:
        return self._clock()

    # --- Aggregation ------------------------------------------------------
    def aggregate_from_recipes(self, recipe_ids: Iterable, date: Optional[str], owner) -> List[GroceryItem]:
        with self.storage.transaction():
            return aggregator.aggregate_from_recipes(
                list(recipe_ids), date, owner,
                recipe_repository=self.recipes, item_repository=self.items,
                today=self.today(), bus=self.bus,
            )

    def aggregate_from_meal_plans(self, meal_plan_ids: Iterable, date: Optional[str], owner) -> List[GroceryItem]:
        with self.storage.transaction():
            return aggregator.aggregate_from_meal_plans(
                list(meal_plan_ids), date, owner,
                meal_plan_repository=self.meal_plans, item_repository=self.items,
                today=self.today(), bus=self.bus,
            )

    def generate_from_recipes(self, request, owner) -> List[GroceryItem]:
        req = validate_request(GenerateFromRecipesRequest, request)
        return self.aggregate_from_recipes(req.recipe_ids, req.date, owner)

    def generate_from_meal_plans(self, request, owner) -> List[GroceryItem]:
        req = validate_request(GenerateFromMealPlansRequest, request)
        return self.aggregate_from_meal_plans(req.meal_plan_ids, req.date, owner)

    # --- Grocery items ----------------------------------------------------
    def merge_or_add(self, candidate: GroceryItem) -> GroceryItem:
        with self.storage.transaction():
            active = self.items.find_merge_candidates(
                candidate.item_name, candidate.unit, candidate.note, candidate.owner)
            return merge.merge_or_add(candidate, active, self.items, today=self.today(), bus=self.bus)

    def add_item(self, data, owner) -> GroceryItem:
        req = validate_request(GroceryItemInput, data)
        candidate = GroceryItem(
            item_name=req.item_name, unit=req.unit, quantity=req.quantity,
            note=req.note, date_added=req.date_added, owner=owner,
        )
        return self.merge_or_add(candidate)

    def update_item(self, item_id, data, owner) -> GroceryItem:
        req = validate_request(GroceryItemInput, data)
        with self.storage.transaction():
            item = self.items.find_by_id(item_id, owner)
            if item is None:
                raise NotFound(f"Item not found with id {item_id}")
            item.item_name = req.item_name
            item.quantity = req.quantity
            item.unit = req.unit
            item.note = req.note
            item.date_added = req.date_added
            return self.items.save(item)

    def delete_item(self, item_id, owner) -> None:
        with self.storage.transaction():
            if not self.items.delete(item_id, owner):
                raise NotFound(f"Item not found with id {item_id}")

    def list_active(self, owner) -> List[GroceryItem]:
        return summary.active_items(owner, self.items)

    def list_purchased(self, owner) -> List[GroceryItem]:
        return summary.purchased_items(owner, self.items)

    def mark_purchased(self, ids, owner) -> List[GroceryItem]:
        if isinstance(ids, (dict, PurchaseRequest)):
            ids = validate_request(PurchaseRequest, ids).ids
        with self.storage.transaction():
            return purchases.mark_purchased(ids, owner, self.items, today=self.today(), bus=self.bus)

    def mark_unpurchased(self, ids, owner) -> List[GroceryItem]:
        if isinstance(ids, (dict, PurchaseRequest)):
            ids = validate_request(PurchaseRequest, ids).ids
        with self.storage.transaction():
            return purchases.mark_unpurchased(ids, owner, self.items, bus=self.bus)

    # --- Recipes & scaling ------------------------------------------------
    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        if not (ingredient.name or '').strip():
            raise InvalidArgument("Ingredient name is required")
        with self.storage.transaction():
            return self.ingredients.save(ingredient)

    def save_recipe(self, recipe: Recipe) -> Recipe:
        if not (recipe.name or '').strip():
            raise InvalidArgument("Recipe name is required")
        scaling.validate_servings(recipe.servings)
        for quantity in recipe.quantities():
            merge.validate_quantity(quantity)
        with self.storage.transaction():
            return self.recipes.save(recipe)

    def save_meal_plan(self, meal_plan: MealPlan) -> MealPlan:
        if not (meal_plan.name or '').strip():
            raise InvalidArgument("Meal plan name is required")
        with self.storage.transaction():
            return self.meal_plans.save(meal_plan)

    def rescale(self, recipe_id, new_servings, owner) -> Recipe:
        if isinstance(new_servings, (dict, ServingsUpdateRequest)):
            new_servings = validate_request(ServingsUpdateRequest, new_servings).servings
        with self.storage.transaction():
            recipe = self.recipes.find_by_id(recipe_id, owner)
            if recipe is None:
                logger.warning(f"Rescale rejected: recipe {recipe_id} not found for owner {owner}")
                raise NotFound(f"Recipe not found or doesn't belong to user: {recipe_id}")
            scaling.rescale(recipe, new_servings, strict=self._strict_servings, bus=self.bus)
            return self.recipes.save(recipe)

    def rescale_all_default(self, new_servings, owner) -> List[Recipe]:
        """Rescale every recipe of the owner; None means the configured default servings."""
        if new_servings is None:
            new_servings = config.DEFAULT_SERVINGS
        with self.storage.transaction():
            recipes = self.recipes.find_all_by_owner(owner)
            scaling.rescale_all(recipes, new_servings, strict=self._strict_servings, bus=self.bus)
            return self.recipes.save_all(recipes)

    def delete_recipe(self, recipe_id, owner) -> None:
        with self.storage.transaction():
            catalog.delete_recipe(recipe_id, owner, self.recipes, self.meal_plans)

    def delete_ingredient(self, ingredient_id) -> None:
        with self.storage.transaction():
            catalog.delete_ingredient(ingredient_id, self.ingredients, self.recipes)

    def delete_meal_plan(self, meal_plan_id, owner) -> None:
        with self.storage.transaction():
            catalog.delete_meal_plan(meal_plan_id, owner, self.meal_plans)

    # --- Grocery list snapshots -------------------------------------------
    def generate_grocery_list(self, request, owner) -> GroceryList:
        """Build (without saving) a named grocery list from recipes or a meal plan."""
        req = validate_request(GroceryListRequest, request)
        with self.storage.transaction():
            if req.meal_plan_id is not None:
                meal_plan = aggregator.resolve_meal_plans([req.meal_plan_id], owner, self.meal_plans)[0]
                entries = list_builder.build_entries_from_meal_plan(meal_plan)
            else:
                recipes = aggregator.resolve_recipes(req.recipe_ids, owner, self.recipes)
                entries = list_builder.build_entries_from_recipes(recipes)
        return list_builder.build_grocery_list(req.name, req.date, entries, owner, req.meal_plan_id)

    def save_grocery_list(self, grocery_list: GroceryList) -> GroceryList:
        list_builder.validate_for_save(grocery_list)
        with self.storage.transaction():
            saved = self.lists.save(grocery_list)
        logger.info(f"Saved grocery list {saved.id} ({saved.name}) with {len(saved.entries)} entries")
        publish_list_saved(saved, self.bus)
        return saved

    def delete_grocery_list(self, list_id, owner) -> None:
        with self.storage.transaction():
            if not self.lists.delete(list_id, owner):
                raise NotFound(f"Grocery list not found: {list_id}")

    # --- Reporting --------------------------------------------------------
    def summary(self, owner) -> Dict[str, Any]:
        return summary.summarize(
            owner,
            recipe_repository=self.recipes, meal_plan_repository=self.meal_plans,
            ingredient_repository=self.ingredients, item_repository=self.items,
        )


__all__ = ["GroceryService", "validate_request"]
