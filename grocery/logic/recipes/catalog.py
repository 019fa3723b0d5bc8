"""Deletes of catalogue entities that other entities may still reference."""
import logging

from grocery.domain.errors import Conflict, NotFound

logger = logging.getLogger(__name__)

__all__ = ["delete_recipe", "delete_ingredient", "delete_meal_plan"]


def delete_recipe(recipe_id, owner, recipe_repository, meal_plan_repository) -> None:
    if recipe_repository.find_by_id(recipe_id, owner) is None:
        raise NotFound(f"Recipe not found or doesn't belong to user: {recipe_id}")
    usage = meal_plan_repository.count_by_recipe(recipe_id)
    if usage > 0:
        raise Conflict("Recipe is used in one or more meal plans and cannot be deleted.")
    recipe_repository.delete(recipe_id, owner)
    logger.info(f"Deleted recipe {recipe_id}")


def delete_ingredient(ingredient_id, ingredient_repository, recipe_repository) -> None:
    if ingredient_repository.find_by_id(ingredient_id) is None:
        raise NotFound(f"Ingredient not found: {ingredient_id}")
    usage = recipe_repository.count_by_ingredient(ingredient_id)
    if usage > 0:
        raise Conflict("Ingredient is used in one or more recipes and cannot be deleted.")
    ingredient_repository.delete(ingredient_id)
    logger.info(f"Deleted ingredient {ingredient_id}")


def delete_meal_plan(meal_plan_id, owner, meal_plan_repository) -> None:
    if not meal_plan_repository.delete(meal_plan_id, owner):
        raise NotFound(f"Meal Plan not found or doesn't belong to user: {meal_plan_id}")
    logger.info(f"Deleted meal plan {meal_plan_id}")
