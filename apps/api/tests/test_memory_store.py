"""In-memory document store semantics."""

from __future__ import annotations

import unittest

from devcamper.domain.geo import GeoQuery, miles_to_radians
from devcamper.repositories.base import DuplicateKeyError
from devcamper.repositories.memory import InMemoryCollection, InMemoryStore, match_document


class MatchDocumentTests(unittest.TestCase):
    def test_equality_list_membership_and_dotted_paths(self) -> None:
        document = {"careers": ["Business", "Other"], "location": {"state": "MA"}, "housing": True}

        self.assertTrue(match_document(document, {"careers": "Business"}))
        self.assertFalse(match_document(document, {"careers": "UI/UX"}))
        self.assertTrue(match_document(document, {"location.state": "MA"}))
        self.assertTrue(match_document(document, {"housing": True, "location.state": "MA"}))
        self.assertTrue(match_document(document, {"missing": None}))

    def test_comparison_and_set_operators(self) -> None:
        document = {"average_cost": 8000.0, "careers": ["Business"]}

        self.assertTrue(match_document(document, {"average_cost": {"$lte": 10000, "$gt": 5000}}))
        self.assertFalse(match_document(document, {"average_cost": {"$lt": 8000}}))
        self.assertTrue(match_document(document, {"careers": {"$in": ["Other", "Business"]}}))
        self.assertTrue(match_document(document, {"careers": {"$nin": ["Other"]}}))
        self.assertTrue(match_document(document, {"average_cost": {"$ne": 1}}))
        self.assertFalse(match_document({"average_cost": None}, {"average_cost": {"$gte": 0}}))

    def test_unknown_operator_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            match_document({"name": "x"}, {"name": {"$regex": "x"}})

    def test_center_sphere_filter(self) -> None:
        boston = {"location": {"type": "Point", "coordinates": [-71.104, 42.350]}}
        cambridge = {"location": {"type": "Point", "coordinates": [-71.109, 42.373]}}
        washington = {"location": {"type": "Point", "coordinates": [-77.036, 38.897]}}
        geo_filter = GeoQuery(longitude=-71.104, latitude=42.350, radius=miles_to_radians(10)).as_filter()

        self.assertTrue(match_document(boston, geo_filter))
        self.assertTrue(match_document(cambridge, geo_filter))
        self.assertFalse(match_document(washington, geo_filter))
        self.assertFalse(match_document({"name": "no location"}, geo_filter))


class InMemoryCollectionTests(unittest.TestCase):
    def test_create_assigns_string_id_and_returns_detached_copy(self) -> None:
        collection = InMemoryCollection("bootcamps")

        created = collection.create({"name": "Devworks", "careers": ["Business"]})
        created["careers"].append("Other")

        stored = collection.find_by_id(created["id"])
        self.assertIsInstance(created["id"], str)
        self.assertEqual(stored["careers"], ["Business"])
        self.assertEqual(collection.write_count, 1)

    def test_find_sorts_skips_and_limits(self) -> None:
        collection = InMemoryCollection("courses")
        for title, tuition in (("b", 2), ("a", 3), ("c", 1), ("d", None)):
            collection.create({"title": title, "tuition": tuition})

        by_tuition = collection.find(sort=[("tuition", -1)])
        self.assertEqual([doc["title"] for doc in by_tuition], ["a", "b", "c", "d"])

        page = collection.find(sort=[("title", 1)], skip=1, limit=2)
        self.assertEqual([doc["title"] for doc in page], ["b", "c"])
        self.assertEqual(collection.count({"tuition": {"$gte": 2}}), 2)

    def test_update_and_delete_by_id(self) -> None:
        collection = InMemoryCollection("courses")
        created = collection.create({"title": "Front End", "tuition": 8000})

        updated = collection.update_by_id(created["id"], {"tuition": 9000, "id": "ignored"})
        self.assertEqual(updated["tuition"], 9000)
        self.assertEqual(updated["id"], created["id"])

        self.assertIsNone(collection.update_by_id("missing", {"tuition": 1}))
        self.assertEqual(collection.delete_by_id(created["id"])["title"], "Front End")
        self.assertIsNone(collection.delete_by_id(created["id"]))

    def test_delete_many_reports_removed_count(self) -> None:
        collection = InMemoryCollection("reviews")
        collection.create({"bootcamp": "b-1", "user": "u-1"})
        collection.create({"bootcamp": "b-1", "user": "u-2"})
        collection.create({"bootcamp": "b-2", "user": "u-1"})

        self.assertEqual(collection.delete_many({"bootcamp": "b-1"}), 2)
        self.assertEqual(collection.count(), 1)


class InMemoryStoreUniquenessTests(unittest.TestCase):
    def test_unique_bootcamp_name(self) -> None:
        store = InMemoryStore()
        store.bootcamps.create({"name": "Devworks"})
        other = store.bootcamps.create({"name": "ModernTech"})

        with self.assertRaises(DuplicateKeyError) as ctx:
            store.bootcamps.create({"name": "Devworks"})
        self.assertEqual(ctx.exception.fields, ("name",))

        with self.assertRaises(DuplicateKeyError):
            store.bootcamps.update_by_id(other["id"], {"name": "Devworks"})

    def test_one_review_per_user_and_bootcamp(self) -> None:
        store = InMemoryStore()
        store.reviews.create({"bootcamp": "b-1", "user": "u-1", "rating": 8})
        store.reviews.create({"bootcamp": "b-2", "user": "u-1", "rating": 8})

        with self.assertRaises(DuplicateKeyError) as ctx:
            store.reviews.create({"bootcamp": "b-1", "user": "u-1", "rating": 2})
        self.assertEqual(ctx.exception.fields, ("bootcamp", "user"))

    def test_unique_user_email(self) -> None:
        store = InMemoryStore()
        store.users.create({"email": "john@gmail.com"})

        with self.assertRaises(DuplicateKeyError):
            store.users.create({"email": "john@gmail.com"})


if __name__ == "__main__":
    unittest.main()
