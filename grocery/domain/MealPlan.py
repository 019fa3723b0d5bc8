"""MealPlan domain entity: named plan binding recipes to calendar dates."""
from datetime import datetime
from typing import Callable, List, Optional

from grocery.domain.Recipe import Recipe


class MealPlanEntry:
    def __init__(self, recipe: Optional[Recipe] = None, date: str = "",
                 recipe_id: Optional[int] = None, id: Optional[int] = None):
        self.id = id
        self.recipe = recipe
        self.date = date
        if recipe_id is None and recipe is not None:
            recipe_id = recipe.id
        self.recipe_id = recipe_id

    def __str__(self) -> str:
        name = self.recipe.name if self.recipe is not None else "-"
        return f"{self.date}: {name}"

    __repr__ = __str__

    def to_dict(self):
        return {"id": self.id, "recipe_id": self.recipe_id, "date": self.date}


class MealPlan:
    def __init__(self, name: str = "", entries: Optional[List[MealPlanEntry]] = None,
                 owner=None, id: Optional[int] = None, created_at: Optional[str] = None):
        self.id = id
        self.owner = owner
        self.name = name
        self.entries = entries[:] if entries else []
        self.created_at = created_at or datetime.now().isoformat(timespec="seconds")

    def __str__(self) -> str:
        return f"Meal Plan {self.name} - {len(self.entries)} entries"

    __repr__ = __str__

    def recipes(self) -> List[Recipe]:
        """Recipes of every entry that has one, in entry order (one per entry)."""
        return [entry.recipe for entry in self.entries if entry.recipe is not None]

    def references_recipe(self, recipe_id: int) -> bool:
        return any(entry.recipe_id == recipe_id for entry in self.entries)

    @staticmethod
    def from_dict(data, resolve_recipe: Optional[Callable[[int], Optional[Recipe]]] = None):
        d = dict(data)
        entries = []
        for raw in d.get("entries", []):
            recipe_id = raw.get("recipe_id")
            recipe = resolve_recipe(recipe_id) if resolve_recipe and recipe_id is not None else None
            entries.append(MealPlanEntry(recipe=recipe, date=raw.get("date") or "",
                                         recipe_id=recipe_id, id=raw.get("id")))
        return MealPlan(
            name=d.get("name", ""),
            entries=entries,
            owner=d.get("owner"),
            id=d.get("id"),
            created_at=d.get("created_at"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "created_at": self.created_at,
            "entries": [entry.to_dict() for entry in self.entries],
        }
