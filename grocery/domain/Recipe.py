"""Recipe domain entity: name, description, servings and ordered ingredient lines."""
from typing import Dict, List, Optional

from grocery.domain.Ingredient import Ingredient


class RecipeIngredient:
    """One line of a recipe: how much of an ingredient, in which unit, with an optional note."""

    def __init__(self, ingredient: Optional[Ingredient] = None, quantity: float = 0.0,
                 unit: str = "", note: Optional[str] = None, ingredient_id: Optional[int] = None):
        self.ingredient = ingredient
        self.quantity = quantity
        self.unit = unit
        self.note = note
        # Kept even when the catalogue entry is gone, so the line can be written back unchanged
        if ingredient_id is None and ingredient is not None:
            ingredient_id = ingredient.id
        self.ingredient_id = ingredient_id

    @property
    def display_name(self) -> str:
        return self.ingredient.name if self.ingredient is not None else ""

    def __str__(self) -> str:
        note = f" ({self.note})" if self.note else ""
        return f"{self.display_name} - {self.quantity} {self.unit}{note}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, ingredients: Optional[Dict[int, Ingredient]] = None):
        d = dict(data) if isinstance(data, dict) else {}
        ingredient_id = d.get("ingredient_id")
        ingredient = None
        if ingredients is not None and ingredient_id is not None:
            ingredient = ingredients.get(ingredient_id)
        elif isinstance(d.get("ingredient"), dict):
            ingredient = Ingredient.from_dict(d["ingredient"])
            ingredient_id = ingredient.id
        return RecipeIngredient(
            ingredient=ingredient,
            quantity=float(d.get("quantity") or 0),
            unit=d.get("unit") or "",
            note=d.get("note"),
            ingredient_id=ingredient_id,
        )

    def to_dict(self):
        return {
            "ingredient_id": self.ingredient_id,
            "quantity": self.quantity,
            "unit": self.unit,
            "note": self.note,
        }


class Recipe:
    def __init__(self, name: str = "", servings: Optional[int] = 1,
                 ingredients: Optional[List[RecipeIngredient]] = None, description: str = "",
                 owner=None, id: Optional[int] = None):
        self.id = id
        self.owner = owner
        self.name = name
        self.description = description
        self.servings = servings
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.name} - {self.servings} servings - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    def quantities(self) -> List[float]:
        return [line.quantity for line in self.ingredients]

    def uses_ingredient(self, ingredient_id: int) -> bool:
        return any(line.ingredient_id == ingredient_id for line in self.ingredients)

    @staticmethod
    def from_dict(data, ingredients: Optional[Dict[int, Ingredient]] = None):
        '''Builds a Recipe; ingredient lines are resolved against the given catalogue.'''
        d = dict(data)
        return Recipe(
            name=d.get("name", ""),
            servings=d.get("servings"),
            ingredients=[RecipeIngredient.from_dict(line, ingredients) for line in d.get("ingredients", [])],
            description=d.get("description") or "",
            owner=d.get("owner"),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "description": self.description,
            "servings": self.servings,
            "ingredients": [line.to_dict() for line in self.ingredients],
        }
