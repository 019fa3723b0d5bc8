"""GroceryList aggregate: named, dated snapshot of aggregated ingredient entries."""
from typing import List, Optional


class GroceryListEntry:
    def __init__(self, ingredient_id: Optional[int] = None, ingredient_name: str = "",
                 unit: str = "", quantity: float = 0.0):
        self.ingredient_id = ingredient_id
        self.ingredient_name = ingredient_name
        self.unit = unit
        self.quantity = quantity

    def __str__(self) -> str:
        return f"{self.ingredient_name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return GroceryListEntry(
            ingredient_id=d.get("ingredient_id"),
            ingredient_name=d.get("ingredient_name") or "",
            unit=d.get("unit") or "",
            quantity=float(d.get("quantity") or 0),
        )

    def to_dict(self):
        return {
            "ingredient_id": self.ingredient_id,
            "ingredient_name": self.ingredient_name,
            "unit": self.unit,
            "quantity": self.quantity,
        }


class GroceryList:
    def __init__(self, name: str = "", date: str = "", entries: Optional[List[GroceryListEntry]] = None,
                 completed: bool = False, meal_plan_id: Optional[int] = None,
                 owner=None, id: Optional[int] = None):
        self.id = id
        self.owner = owner
        self.name = name
        self.date = date
        self.completed = completed
        self.meal_plan_id = meal_plan_id
        self.entries = entries[:] if entries else []

    def get_entries(self):
        return self.entries

    def __str__(self) -> str:
        entries_str = ",\n\t".join(str(entry) for entry in self.entries)
        return f"Grocery List {self.name} ({self.date}):\n\t{entries_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return GroceryList(
            name=d.get("name", ""),
            date=d.get("date", ""),
            entries=[GroceryListEntry.from_dict(e) for e in d.get("entries", [])],
            completed=bool(d.get("completed", False)),
            meal_plan_id=d.get("meal_plan_id"),
            owner=d.get("owner"),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "date": self.date,
            "completed": self.completed,
            "meal_plan_id": self.meal_plan_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }
