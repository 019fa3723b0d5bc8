"""Recipe scaling: change servings and scale every ingredient line by the same ratio."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from grocery.domain.Recipe import Recipe
from grocery.domain.errors import InvalidArgument
from grocery.events.Event_Bus import EventBus
from grocery.events.event_helpers import publish_recipe_rescaled
from grocery.logic.shopping.merge import validate_quantity
from grocery.utilities import config

logger = logging.getLogger(__name__)

__all__ = ["validate_servings", "scaling_factor", "rescale", "rescale_all"]


def validate_servings(servings) -> int:
    if isinstance(servings, bool) or not isinstance(servings, int):
        raise InvalidArgument(f"Servings must be an integer, got {servings!r}")
    if not config.MIN_SERVINGS <= servings <= config.MAX_SERVINGS:
        raise InvalidArgument(f"Servings must be between {config.MIN_SERVINGS} and {config.MAX_SERVINGS}")
    return servings


def scaling_factor(old_servings, new_servings: int, *, strict: Optional[bool] = None) -> float:
    """Real-valued ratio new/old.

    A missing or non-positive base is treated as 1 unless ``strict`` (defaults
    to the GROCERY_STRICT_SERVINGS setting), in which case it is rejected.
    """
    strict = config.STRICT_SERVINGS if strict is None else strict
    if not old_servings or old_servings < 0:
        if strict:
            raise InvalidArgument(f"Recipe has no valid servings to scale from: {old_servings!r}")
        logger.warning(f"Recipe servings base {old_servings!r} is invalid; scaling from 1")
        old_servings = 1
    return float(new_servings) / float(old_servings)


def rescale(recipe: Recipe, new_servings, *, strict: Optional[bool] = None,
            bus: Optional[EventBus] = None) -> Recipe:
    """Scale the recipe in place to ``new_servings`` and return it."""
    new_servings = validate_servings(new_servings)
    old_servings = recipe.servings
    factor = scaling_factor(old_servings, new_servings, strict=strict)
    for quantity in recipe.quantities():
        validate_quantity(quantity)
    for line in recipe.ingredients:
        line.quantity = line.quantity * factor
    recipe.servings = new_servings
    logger.info(f"Rescaled recipe {recipe.id} ({recipe.name}) from {old_servings} to {new_servings} servings")
    publish_recipe_rescaled(recipe, old_servings, factor, bus)
    return recipe


def rescale_all(recipes: Iterable[Recipe], new_servings, *, strict: Optional[bool] = None,
                bus: Optional[EventBus] = None) -> List[Recipe]:
    """Rescale each recipe independently, each from its own current servings."""
    new_servings = validate_servings(new_servings)
    recipes = list(recipes)
    # Validate every recipe first so a failure leaves all of them untouched
    for recipe in recipes:
        scaling_factor(recipe.servings, new_servings, strict=strict)
        for quantity in recipe.quantities():
            validate_quantity(quantity)
    return [rescale(recipe, new_servings, strict=strict, bus=bus) for recipe in recipes]
