import json
import tempfile
import threading
import unittest
from pathlib import Path

from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.errors import InvalidArgument, NotFound
from grocery.infra.store import Storage
from grocery.service import GroceryService
from grocery.tests.support import make_service, ingredient, recipe, meal_plan, OWNER, OTHER, TODAY


class TestStorage(unittest.TestCase):

    def test_rollback_on_error(self):
        storage = Storage()
        storage.insert("grocery_items", {"item_name": "Milk", "owner": OWNER})
        with self.assertRaises(RuntimeError):
            with storage.transaction():
                storage.insert("grocery_items", {"item_name": "Bread", "owner": OWNER})
                raise RuntimeError("boom")
        self.assertEqual([r["item_name"] for r in storage.rows("grocery_items")], ["Milk"])
        self.assertEqual(storage.next_id("grocery_items"), 2)

    def test_reads_are_copies(self):
        storage = Storage()
        row_id = storage.insert("grocery_items", {"item_name": "Milk", "owner": OWNER})
        row = storage.get("grocery_items", row_id)
        row["item_name"] = "changed"
        self.assertEqual(storage.get("grocery_items", row_id)["item_name"], "Milk")

    def test_update_missing_row(self):
        with self.assertRaises(KeyError):
            Storage().update("grocery_items", {"id": 5})

    def test_json_persistence_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "store.json"
            service = GroceryService(Storage(path), clock=lambda: TODAY)
            flour = ingredient(service, "Flour")
            bread = recipe(service, "Bread", 2, [(flour, 500, "g", None)])
            service.aggregate_from_recipes([bread.id], TODAY, OWNER)
            with open(path, encoding="utf-8") as f:
                self.assertEqual(len(json.load(f)["tables"]["grocery_items"]), 1)

            reopened = GroceryService(Storage(path), clock=lambda: TODAY)
            active = reopened.list_active(OWNER)
            self.assertEqual([(i.item_name, i.quantity) for i in active], [("Flour", 500)])
            self.assertEqual(reopened.recipes.find_by_id(bread.id, OWNER).ingredients[0].display_name, "Flour")
            new = reopened.merge_or_add(GroceryItem("Salt", "g", 5, owner=OWNER))
            self.assertGreater(new.id, active[0].id)

    def test_failed_aggregation_not_flushed(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "store.json"
            service = GroceryService(Storage(path), clock=lambda: TODAY)
            with self.assertRaises(NotFound):
                service.aggregate_from_recipes([1], TODAY, OWNER)
            self.assertFalse(path.exists())

    def test_failed_flush_rolls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            folder = Path(tmp) / "data"
            service = GroceryService(Storage(folder / "store.json"), clock=lambda: TODAY)
            # a plain file where the store's folder should be makes the flush fail
            folder.write_text("not a folder", encoding="utf-8")
            with self.assertRaises(OSError):
                service.merge_or_add(GroceryItem("Milk", "l", 1, owner=OWNER))
            self.assertEqual(service.items.find_active_by_owner(OWNER), [])
            self.assertEqual(service.storage.next_id("grocery_items"), 1)

    def test_concurrent_merges_create_one_item(self):
        service = make_service()
        threads = [threading.Thread(target=service.merge_or_add,
                                    args=(GroceryItem("Milk", "l", 1, owner=OWNER),))
                   for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        active = service.items.find_active_by_owner(OWNER)
        self.assertEqual(len(active), 1)
        self.assertEqual(active[0].quantity, 8)


class TestGroceryItemMaintenance(unittest.TestCase):

    def setUp(self):
        self.service = make_service()

    def test_add_item_validates_input(self):
        with self.assertRaises(InvalidArgument):
            self.service.add_item({"item_name": "", "quantity": 1}, OWNER)
        with self.assertRaises(InvalidArgument):
            self.service.add_item({"item_name": "Milk", "quantity": -2}, OWNER)
        for bad in (float("nan"), float("inf"), "nan"):
            with self.assertRaises(InvalidArgument):
                self.service.add_item({"item_name": "Milk", "quantity": bad}, OWNER)
        self.assertEqual(self.service.items.find_active_by_owner(OWNER), [])
        item = self.service.add_item({"item_name": "  Milk ", "unit": "l", "quantity": 1}, OWNER)
        self.assertEqual(item.item_name, "Milk")
        self.assertEqual(item.date_added, TODAY)

    def test_update_and_delete(self):
        item = self.service.add_item({"item_name": "Milk", "unit": "l", "quantity": 1}, OWNER)
        updated = self.service.update_item(item.id, {"item_name": "Oat milk", "unit": "l", "quantity": 2,
                                                     "date_added": "18-10-2026"}, OWNER)
        self.assertEqual((updated.item_name, updated.quantity), ("Oat milk", 2))
        with self.assertRaises(NotFound):
            self.service.update_item(item.id, {"item_name": "x", "quantity": 1}, OTHER)
        with self.assertRaises(NotFound):
            self.service.delete_item(item.id, OTHER)
        self.service.delete_item(item.id, OWNER)
        with self.assertRaises(NotFound):
            self.service.delete_item(item.id, OWNER)

    def test_active_list_newest_first(self):
        self.service.add_item({"item_name": "Old", "quantity": 1, "date_added": "01-09-2026"}, OWNER)
        self.service.add_item({"item_name": "New", "quantity": 1, "date_added": "10-10-2026"}, OWNER)
        self.service.add_item({"item_name": "Odd", "quantity": 1, "date_added": "someday"}, OWNER)
        self.assertEqual([i.item_name for i in self.service.list_active(OWNER)], ["New", "Old", "Odd"])

    def test_merge_candidates_query(self):
        plain = self.service.add_item({"item_name": "Milk", "unit": "l", "quantity": 1}, OWNER)
        bought = self.service.add_item({"item_name": "Eggs", "unit": "pcs", "quantity": 6}, OWNER)
        self.service.mark_purchased([bought.id], OWNER)
        found = self.service.items.find_merge_candidates(" MILK", "L ", "organic", OWNER)
        self.assertEqual([i.id for i in found], [plain.id])
        self.assertEqual(self.service.items.find_merge_candidates("Eggs", "pcs", None, OWNER), [])
        self.assertEqual(self.service.items.find_merge_candidates("Milk", "l", None, OTHER), [])

    def test_summary(self):
        flour = ingredient(self.service, "Flour")
        bread = recipe(self.service, "Bread", 2, [(flour, 500, "g", None)])
        meal_plan(self.service, "Week", [(bread, "20-10-2026")])
        item = self.service.add_item({"item_name": "Milk", "quantity": 1}, OWNER)
        self.service.add_item({"item_name": "Eggs", "quantity": 6}, OWNER)
        self.service.mark_purchased([item.id], OWNER)
        self.assertEqual(self.service.summary(OWNER), {
            "total_recipes": 1,
            "total_meal_plans": 1,
            "total_ingredients": 1,
            "active_items": 1,
            "purchased_items": 1,
        })
        self.assertEqual(self.service.summary(OTHER)["total_recipes"], 0)
