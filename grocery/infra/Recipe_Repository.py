"""Recipe and ingredient repositories over the table store."""
from typing import Dict, List, Optional

from grocery.domain.Ingredient import Ingredient
from grocery.domain.Recipe import Recipe
from grocery.infra.store import Storage


class IngredientRepository:
    TABLE = "ingredients"

    def __init__(self, storage: Storage):
        self.storage = storage

    def find_by_id(self, ingredient_id) -> Optional[Ingredient]:
        row = self.storage.get(self.TABLE, ingredient_id)
        return Ingredient.from_dict(row) if row else None

    def find_all(self) -> List[Ingredient]:
        return [Ingredient.from_dict(row) for row in self.storage.rows(self.TABLE)]

    def catalogue(self) -> Dict[int, Ingredient]:
        return {ing.id: ing for ing in self.find_all()}

    def save(self, ingredient: Ingredient) -> Ingredient:
        if ingredient.id is None or self.storage.get(self.TABLE, ingredient.id) is None:
            ingredient.id = self.storage.insert(self.TABLE, ingredient.to_dict())
        else:
            self.storage.update(self.TABLE, ingredient.to_dict())
        return ingredient

    def delete(self, ingredient_id) -> bool:
        return self.storage.delete(self.TABLE, ingredient_id)


class RecipeRepository:
    TABLE = "recipes"

    def __init__(self, storage: Storage):
        self.storage = storage
        self.ingredients = IngredientRepository(storage)

    def _build(self, row) -> Recipe:
        return Recipe.from_dict(row, self.ingredients.catalogue())

    def find_by_id(self, recipe_id, owner) -> Optional[Recipe]:
        row = self.storage.get(self.TABLE, recipe_id)
        if row is None or row.get("owner") != owner:
            return None
        return self._build(row)

    def find_all_by_owner(self, owner) -> List[Recipe]:
        catalogue = self.ingredients.catalogue()
        return [Recipe.from_dict(row, catalogue) for row in self.storage.rows(self.TABLE)
                if row.get("owner") == owner]

    def save(self, recipe: Recipe) -> Recipe:
        if recipe.id is None or self.storage.get(self.TABLE, recipe.id) is None:
            recipe.id = self.storage.insert(self.TABLE, recipe.to_dict())
        else:
            self.storage.update(self.TABLE, recipe.to_dict())
        return recipe

    def save_all(self, recipes: List[Recipe]) -> List[Recipe]:
        with self.storage.transaction():
            return [self.save(recipe) for recipe in recipes]

    def delete(self, recipe_id, owner) -> bool:
        with self.storage.transaction():
            if self.find_by_id(recipe_id, owner) is None:
                return False
            return self.storage.delete(self.TABLE, recipe_id)

    def count_by_ingredient(self, ingredient_id) -> int:
        """Number of recipes (any owner) with a line that references the ingredient."""
        return sum(1 for row in self.storage.rows(self.TABLE) if Recipe.from_dict(row).uses_ingredient(ingredient_id))
