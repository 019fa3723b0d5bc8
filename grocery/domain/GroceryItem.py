"""GroceryItem domain entity: one owned line of a shopping list."""
from typing import Optional


class GroceryItem:
    def __init__(self, item_name: str = "", unit: str = "", quantity: float = 0.0,
                 note: Optional[str] = None, date_added: Optional[str] = None,
                 purchased: bool = False, date_purchased: Optional[str] = None,
                 owner=None, id: Optional[int] = None):
        self.id = id
        self.owner = owner
        self.item_name = item_name
        self.unit = unit
        self.quantity = quantity
        self.note = note
        self.date_added = date_added
        self.purchased = purchased
        self.date_purchased = date_purchased

    @property
    def active(self) -> bool:
        return not self.purchased

    def add_quantity(self, quantity: float):
        '''Increments the quantity by the given amount.'''
        self.quantity += quantity

    def mark_purchased(self, today: str):
        self.purchased = True
        self.date_purchased = today

    def mark_unpurchased(self):
        self.purchased = False
        self.date_purchased = None

    def __str__(self) -> str:
        parts = [f"{self.item_name} - {self.quantity} {self.unit}"]
        if self.note:
            parts.append(f"Note: {self.note}")
        if self.purchased:
            parts.append(f"Purchased: {self.date_purchased}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a GroceryItem object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        purchased = bool(d.get("purchased", False))
        return GroceryItem(
            item_name=d.get("item_name") or "",
            unit=d.get("unit") or "",
            quantity=float(d.get("quantity") or 0),
            note=d.get("note"),
            date_added=d.get("date_added"),
            purchased=purchased,
            date_purchased=d.get("date_purchased") if purchased else None,
            owner=d.get("owner"),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "item_name": self.item_name,
            "unit": self.unit,
            "quantity": self.quantity,
            "note": self.note,
            "date_added": self.date_added,
            "purchased": self.purchased,
            "date_purchased": self.date_purchased,
        }
