"""Shared builders for the test suites: a fresh in-memory service and seed data."""
from grocery.domain.Ingredient import Ingredient
from grocery.domain.MealPlan import MealPlan, MealPlanEntry
from grocery.domain.Recipe import Recipe, RecipeIngredient
from grocery.events.Event_Bus import EventBus
from grocery.infra.store import Storage
from grocery.service import GroceryService

TODAY = "19-10-2026"
OWNER = "household-1"
OTHER = "household-2"


def make_service(**kwargs) -> GroceryService:
    kwargs.setdefault("bus", EventBus())
    return GroceryService(Storage(), clock=lambda: TODAY, **kwargs)


def ingredient(service, name, unit="g"):
    return service.save_ingredient(Ingredient(name, unit))


def recipe(service, name, servings, lines, owner=OWNER):
    """lines: (Ingredient, quantity, unit, note) tuples."""
    r = Recipe(
        name=name,
        servings=servings,
        ingredients=[RecipeIngredient(ing, qty, unit, note) for ing, qty, unit, note in lines],
        owner=owner,
    )
    return service.save_recipe(r)


def meal_plan(service, name, entries, owner=OWNER):
    """entries: (Recipe, date) tuples."""
    plan = MealPlan(name=name, entries=[MealPlanEntry(r, d) for r, d in entries], owner=owner)
    return service.save_meal_plan(plan)
