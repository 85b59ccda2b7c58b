import unittest
from unittest.mock import MagicMock, patch

from redis import exceptions as redis_exceptions

from iconbox.directory import (
    InMemoryDirectoryStore,
    RedisDirectoryStore,
    SqlDirectoryStore,
)
from iconbox.errors import StoreUnavailableError


class InMemoryDirectoryStoreTests(unittest.TestCase):
    def test_put_get_list(self):
        store = InMemoryDirectoryStore()
        store.put("cat", "cat.png")
        store.put("dog", "dog.png")
        store.put("cat", "cat.png")
        self.assertEqual(store.get("cat"), "cat.png")
        self.assertIsNone(store.get("fish"))
        self.assertEqual(store.list_keys(), ["cat", "dog"])


class SqlDirectoryStoreTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store.
    """

    def setUp(self):
        self.store = SqlDirectoryStore("sqlite+pysqlite:///:memory:")

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlDirectoryStore("")

    def test_put_and_get(self):
        self.store.put("cat", "cat.png")
        self.assertEqual(self.store.get("cat"), "cat.png")
        self.assertIsNone(self.store.get("dog"))

    def test_put_overwrites(self):
        self.store.put("cat", "old.png")
        self.store.put("cat", "cat.png")
        self.assertEqual(self.store.get("cat"), "cat.png")
        self.assertEqual(self.store.list_keys(), ["cat"])

    def test_list_keys_sorted(self):
        for name in ("zebra", "Apple", "mango"):
            self.store.put(name, f"{name}.png")
        self.assertEqual(self.store.list_keys(), ["Apple", "mango", "zebra"])


class RedisDirectoryStoreTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("iconbox.directory.redis.Redis.from_url")
        self.mock_from_url = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = MagicMock()
        self.mock_from_url.return_value = self.client
        self.store = RedisDirectoryStore(url="redis://localhost:6379/0")

    def test_uses_hash(self):
        self.mock_from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=True
        )
        self.store.put("cat", "cat.png")
        self.client.hset.assert_called_once_with("iconbox:icons", "cat", "cat.png")

        self.client.hget.return_value = "cat.png"
        self.assertEqual(self.store.get("cat"), "cat.png")
        self.client.hget.assert_called_once_with("iconbox:icons", "cat")

        self.client.hkeys.return_value = ["cat", "dog"]
        self.assertEqual(self.store.list_keys(), ["cat", "dog"])

    def test_connection_error_is_unavailable(self):
        self.client.hkeys.side_effect = redis_exceptions.ConnectionError("down")
        with self.assertRaises(StoreUnavailableError):
            self.store.list_keys()

        self.client.hset.side_effect = redis_exceptions.TimeoutError("slow")
        with self.assertRaises(StoreUnavailableError):
            self.store.put("cat", "cat.png")


if __name__ == "__main__":
    unittest.main()
