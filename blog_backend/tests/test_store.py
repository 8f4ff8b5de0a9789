import unittest

from blog_backend.errors import StoreError
from blog_backend.store import Base, InMemoryPostStore, PostRecord, SqlPostStore


class PostStoreContractMixin:
    """Store contract shared by every implementation. Subclasses set ``self.store``."""

    def test_create_assigns_id_and_defaults_image(self):
        post = self.store.create({"title": "Hi", "content": "World"})
        self.assertTrue(post.id)
        self.assertEqual(post, PostRecord(id=post.id, title="Hi", content="World", image=""))
        self.assertEqual(self.store.get(post.id), post)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get("missing"))

    def test_list_keeps_insertion_order(self):
        titles = ["first", "second", "third"]
        for title in titles:
            self.store.create({"title": title, "content": "c"})
        self.assertEqual([p.title for p in self.store.list()], titles)

    def test_update_replaces_only_given_fields(self):
        post = self.store.create({"title": "a", "content": "b", "image": "c.png"})
        updated = self.store.update(post.id, {"title": "A", "content": "B"})
        self.assertEqual(updated, PostRecord(id=post.id, title="A", content="B", image="c.png"))
        self.assertEqual(self.store.get(post.id), updated)

        updated = self.store.update(post.id, {"image": ""})
        self.assertEqual(updated.image, "")
        self.assertEqual(updated.title, "A")

    def test_update_ignores_id(self):
        post = self.store.create({"title": "a", "content": "b"})
        updated = self.store.update(post.id, {"id": "other", "_id": "other", "title": "x"})
        self.assertEqual(updated.id, post.id)

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.store.update("missing", {"title": "x"}))

    def test_delete(self):
        kept = self.store.create({"title": "keep", "content": "c"})
        gone = self.store.create({"title": "drop", "content": "c"})
        self.assertTrue(self.store.delete(gone.id))
        self.assertFalse(self.store.delete(gone.id))
        self.assertIsNone(self.store.get(gone.id))
        self.assertEqual(self.store.list(), [kept])


class InMemoryPostStoreTests(PostStoreContractMixin, unittest.TestCase):
    def setUp(self):
        self.store = InMemoryPostStore()

    def test_reset(self):
        self.store.create({"title": "a", "content": "b"})
        self.store.reset()
        self.assertEqual(self.store.list(), [])


class SqlPostStoreTests(PostStoreContractMixin, unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store logic.
    """

    def setUp(self):
        self.store = SqlPostStore("sqlite+pysqlite:///:memory:")

    def tearDown(self):
        self.store.engine.dispose()

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlPostStore("")

    def test_driver_errors_become_store_errors(self):
        Base.metadata.drop_all(self.store.engine)
        with self.assertRaises(StoreError) as ctx:
            self.store.list()
        self.assertIn("no such table", str(ctx.exception))
        with self.assertRaises(StoreError):
            self.store.create({"title": "a", "content": "b"})


if __name__ == "__main__":
    unittest.main()
