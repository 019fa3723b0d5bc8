import unittest
from grocery.domain.GroceryItem import GroceryItem
from grocery.domain.Ingredient import Ingredient
from grocery.domain.errors import NotFound
from grocery.logic.shopping.aggregator import fold_lines, recipe_lines
from grocery.domain.Recipe import Recipe, RecipeIngredient
from grocery.tests.support import make_service, ingredient, recipe, meal_plan, OWNER, OTHER


def snapshot(items):
    return [(i.item_name, i.unit, i.note, i.quantity) for i in items]


class TestAggregateFromRecipes(unittest.TestCase):

    def setUp(self):
        self.service = make_service()
        self.flour = ingredient(self.service, "Flour")
        self.milk = ingredient(self.service, "Milk", "l")
        self.eggs = ingredient(self.service, "Eggs", "pcs")
        self.pancakes = recipe(self.service, "Pancakes", 4, [
            (self.flour, 200, "g", None),
            (self.milk, 0.5, "l", None),
            (self.eggs, 2, "pcs", None),
        ])
        self.crepes = recipe(self.service, "Crepes", 2, [
            (self.eggs, 3, "pcs", None),
            (self.flour, 125, "G", ""),
            (self.milk, 0.25, "l", None),
        ])

    def test_lines_with_equal_keys_are_summed_in_first_seen_order(self):
        items = self.service.aggregate_from_recipes([self.pancakes.id, self.crepes.id], "20-10-2026", OWNER)
        self.assertEqual(snapshot(items), [
            ("Flour", "g", None, 325),
            ("Milk", "l", None, 0.75),
            ("Eggs", "pcs", None, 5),
        ])
        for item in items:
            self.assertEqual(item.date_added, "20-10-2026")
            self.assertEqual(item.owner, OWNER)
            self.assertFalse(item.purchased)
        self.assertEqual(len(self.service.items.find_active_by_owner(OWNER)), 3)

    def test_aggregation_is_deterministic(self):
        first = self.service.aggregate_from_recipes([self.crepes.id, self.pancakes.id], "20-10-2026", OWNER)
        other = make_service()
        flour = ingredient(other, "Flour")
        milk = ingredient(other, "Milk", "l")
        eggs = ingredient(other, "Eggs", "pcs")
        pancakes = recipe(other, "Pancakes", 4, [(flour, 200, "g", None), (milk, 0.5, "l", None), (eggs, 2, "pcs", None)])
        crepes = recipe(other, "Crepes", 2, [(eggs, 3, "pcs", None), (flour, 125, "G", ""), (milk, 0.25, "l", None)])
        second = other.aggregate_from_recipes([crepes.id, pancakes.id], "20-10-2026", OWNER)
        self.assertEqual(snapshot(first), snapshot(second))

    def test_duplicate_ids_each_contribute(self):
        items = self.service.aggregate_from_recipes([self.pancakes.id, self.pancakes.id], "20-10-2026", OWNER)
        self.assertEqual(snapshot(items)[0], ("Flour", "g", None, 400))

    def test_empty_id_list(self):
        self.assertEqual(self.service.aggregate_from_recipes([], "20-10-2026", OWNER), [])
        self.assertEqual(self.service.items.find_active_by_owner(OWNER), [])

    def test_merges_into_existing_active_item(self):
        self.service.merge_or_add(GroceryItem("Milk", "l", 1, note=None, owner=OWNER))
        soup = recipe(self.service, "Soup", 2, [(self.milk, 0.5, "l", None)])
        items = self.service.aggregate_from_recipes([soup.id], "20-10-2026", OWNER)
        active = self.service.items.find_active_by_owner(OWNER)
        self.assertEqual(len(active), 1)
        self.assertEqual(active[0].quantity, 1.5)
        self.assertEqual(items[0].id, active[0].id)

    def test_unknown_id_aborts_without_writes(self):
        with self.assertRaises(NotFound):
            self.service.aggregate_from_recipes([self.pancakes.id, 999], "20-10-2026", OWNER)
        self.assertEqual(self.service.items.find_active_by_owner(OWNER), [])

    def test_foreign_recipe_is_not_found(self):
        foreign = recipe(self.service, "Theirs", 2, [(self.flour, 1, "g", None)], owner=OTHER)
        with self.assertRaises(NotFound):
            self.service.aggregate_from_recipes([self.pancakes.id, foreign.id], "20-10-2026", OWNER)
        self.assertEqual(self.service.items.find_active_by_owner(OWNER), [])

    def test_lines_without_ingredient_are_skipped(self):
        self.service.storage.delete("ingredients", self.eggs.id)
        items = self.service.aggregate_from_recipes([self.pancakes.id], "20-10-2026", OWNER)
        self.assertEqual([i.item_name for i in items], ["Flour", "Milk"])

    def test_candidates_landing_on_one_item_report_final_state(self):
        sugar = ingredient(self.service, "Sugar")
        cake = recipe(self.service, "Cake", 2, [(sugar, 100, "g", "sifted"), (sugar, 50, "g", None)])
        items = self.service.aggregate_from_recipes([cake.id], "20-10-2026", OWNER)
        self.assertEqual(len(items), 2)
        self.assertEqual(items[0].id, items[1].id)
        self.assertEqual(items[0].quantity, 150)
        self.assertEqual(len(self.service.items.find_active_by_owner(OWNER)), 1)

    def test_generate_from_request_payload(self):
        items = self.service.generate_from_recipes(
            {"recipe_ids": [self.pancakes.id], "date": "20-10-2026", "name": "Weekly"}, OWNER)
        self.assertEqual(len(items), 3)


class TestAggregateFromMealPlans(unittest.TestCase):

    def setUp(self):
        self.service = make_service()
        self.rice = ingredient(self.service, "Rice", "kg")
        self.curry = recipe(self.service, "Curry", 2, [(self.rice, 0.5, "kg", None)])

    def test_entries_sharing_a_recipe_each_contribute(self):
        plan = meal_plan(self.service, "Week 43", [(self.curry, "20-10-2026"), (self.curry, "22-10-2026")])
        items = self.service.aggregate_from_meal_plans([plan.id], "19-10-2026", OWNER)
        self.assertEqual(snapshot(items), [("Rice", "kg", None, 1.0)])

    def test_entries_without_recipe_are_skipped(self):
        plan = meal_plan(self.service, "Week 43", [(self.curry, "20-10-2026")])
        self.service.storage.delete("recipes", self.curry.id)
        self.assertEqual(self.service.aggregate_from_meal_plans([plan.id], "19-10-2026", OWNER), [])

    def test_unknown_plan_raises(self):
        with self.assertRaises(NotFound):
            self.service.aggregate_from_meal_plans([42], "19-10-2026", OWNER)

    def test_entries_pointing_at_foreign_recipes_are_skipped(self):
        flour = ingredient(self.service, "Flour")
        theirs = recipe(self.service, "Their Bread", 2, [(flour, 100, "g", None)], owner=OTHER)
        plan = meal_plan(self.service, "Week 43", [(self.curry, "20-10-2026"), (theirs, "21-10-2026")])
        stored = self.service.meal_plans.find_by_id(plan.id, OWNER)
        self.assertIsNone(stored.entries[1].recipe)
        items = self.service.aggregate_from_meal_plans([plan.id], "19-10-2026", OWNER)
        self.assertEqual(snapshot(items), [("Rice", "kg", None, 0.5)])

    def test_foreign_plan_raises(self):
        plan = meal_plan(self.service, "Theirs", [(self.curry, "20-10-2026")], owner=OTHER)
        with self.assertRaises(NotFound):
            self.service.aggregate_from_meal_plans([plan.id], "19-10-2026", OWNER)


class TestFoldLines(unittest.TestCase):

    def test_fold_without_store(self):
        salt = Ingredient("Salt", "g", id=1)
        r = Recipe("Brine", 1, [RecipeIngredient(salt, 10, "g"), RecipeIngredient(None, 5, "g"),
                                RecipeIngredient(salt, 5, " G ")])
        folded = fold_lines(recipe_lines([r]), "19-10-2026", OWNER)
        self.assertEqual(len(folded), 1)
        self.assertEqual(folded[0].quantity, 15)
        self.assertIsNone(folded[0].id)
