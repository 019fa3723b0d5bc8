"""Grocery item and grocery list repositories over the table store."""
from typing import Iterable, List, Optional

from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.GroceryList import GroceryList
from grocery.infra.store import Storage
from grocery.logic.shopping.keys import keys_match, normalize, item_key


class GroceryItemRepository:
    TABLE = "grocery_items"

    def __init__(self, storage: Storage):
        self.storage = storage

    def _owned(self, owner) -> List[GroceryItem]:
        return [GroceryItem.from_dict(row) for row in self.storage.rows(self.TABLE)
                if row.get("owner") == owner]

    def find_by_id(self, item_id, owner) -> Optional[GroceryItem]:
        row = self.storage.get(self.TABLE, item_id)
        if row is None or row.get("owner") != owner:
            return None
        return GroceryItem.from_dict(row)

    def find_by_ids(self, ids: Iterable, owner) -> List[GroceryItem]:
        """Owner's items whose id is in ``ids``, in stored order; unknown ids are ignored."""
        wanted = set(ids)
        return [item for item in self._owned(owner) if item.id in wanted]

    def find_active_by_owner(self, owner) -> List[GroceryItem]:
        return [item for item in self._owned(owner) if item.active]

    def find_purchased_by_owner(self, owner) -> List[GroceryItem]:
        return [item for item in self._owned(owner) if item.purchased]

    def find_merge_candidates(self, name, unit, note, owner) -> List[GroceryItem]:
        """Active items of the owner whose merge key matches, lowest id first."""
        key = normalize(name, unit, note)
        return [item for item in self.find_active_by_owner(owner) if keys_match(item_key(item), key)]

    def save(self, item: GroceryItem) -> GroceryItem:
        if item.id is None or self.storage.get(self.TABLE, item.id) is None:
            item.id = self.storage.insert(self.TABLE, item.to_dict())
        else:
            self.storage.update(self.TABLE, item.to_dict())
        return item

    def save_all(self, items: List[GroceryItem]) -> List[GroceryItem]:
        with self.storage.transaction():
            return [self.save(item) for item in items]

    def delete(self, item_id, owner) -> bool:
        with self.storage.transaction():
            if self.find_by_id(item_id, owner) is None:
                return False
            return self.storage.delete(self.TABLE, item_id)


class GroceryListRepository:
    TABLE = "grocery_lists"

    def __init__(self, storage: Storage):
        self.storage = storage

    def find_by_id(self, list_id, owner) -> Optional[GroceryList]:
        row = self.storage.get(self.TABLE, list_id)
        if row is None or row.get("owner") != owner:
            return None
        return GroceryList.from_dict(row)

    def find_all_by_owner(self, owner) -> List[GroceryList]:
        return [GroceryList.from_dict(row) for row in self.storage.rows(self.TABLE)
                if row.get("owner") == owner]

    def save(self, grocery_list: GroceryList) -> GroceryList:
        if grocery_list.id is None or self.storage.get(self.TABLE, grocery_list.id) is None:
            grocery_list.id = self.storage.insert(self.TABLE, grocery_list.to_dict())
        else:
            self.storage.update(self.TABLE, grocery_list.to_dict())
        return grocery_list

    def delete(self, list_id, owner) -> bool:
        with self.storage.transaction():
            if self.find_by_id(list_id, owner) is None:
                return False
            return self.storage.delete(self.TABLE, list_id)
