"""Ingredient domain entity: catalogued ingredient with a default unit and quantity."""
from typing import Optional


class Ingredient:
    def __init__(self, name: str = "", unit: str = "", quantity: float = 0.0,
                 id: Optional[int] = None):
        self.id = id
        self.name = name
        self.unit = unit
        self.quantity = quantity

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            name=d.get("name") or "",
            unit=d.get("unit") or "",
            quantity=float(d.get("quantity") or 0),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "unit": self.unit,
            "quantity": self.quantity,
        }
