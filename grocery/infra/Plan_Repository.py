"""Meal plan repository: stores entries by recipe id, resolves them to the owner's recipes on read."""
from typing import List, Optional

from grocery.domain.MealPlan import MealPlan
from grocery.infra.Recipe_Repository import RecipeRepository
from grocery.infra.store import Storage


class MealPlanRepository:
    TABLE = "meal_plans"

    def __init__(self, storage: Storage):
        self.storage = storage
        self.recipes = RecipeRepository(storage)

    def _build(self, row) -> MealPlan:
        # entries only resolve to recipes of the plan's own owner
        owner = row.get("owner")
        return MealPlan.from_dict(row, lambda recipe_id: self.recipes.find_by_id(recipe_id, owner))

    def find_by_id(self, meal_plan_id, owner) -> Optional[MealPlan]:
        row = self.storage.get(self.TABLE, meal_plan_id)
        if row is None or row.get("owner") != owner:
            return None
        return self._build(row)

    def find_all_by_owner(self, owner) -> List[MealPlan]:
        return [self._build(row) for row in self.storage.rows(self.TABLE) if row.get("owner") == owner]

    def save(self, meal_plan: MealPlan) -> MealPlan:
        with self.storage.transaction():
            for entry in meal_plan.entries:
                if entry.id is None:
                    entry.id = self.storage.next_id("meal_plan_entries")
            if meal_plan.id is None or self.storage.get(self.TABLE, meal_plan.id) is None:
                meal_plan.id = self.storage.insert(self.TABLE, meal_plan.to_dict())
            else:
                self.storage.update(self.TABLE, meal_plan.to_dict())
        return meal_plan

    def delete(self, meal_plan_id, owner) -> bool:
        with self.storage.transaction():
            if self.find_by_id(meal_plan_id, owner) is None:
                return False
            return self.storage.delete(self.TABLE, meal_plan_id)

    def count_by_recipe(self, recipe_id) -> int:
        """Number of meal plans (any owner) with an entry that references the recipe."""
        return sum(1 for row in self.storage.rows(self.TABLE) if MealPlan.from_dict(row).references_recipe(recipe_id))
