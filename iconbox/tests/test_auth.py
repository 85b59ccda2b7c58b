import threading
import time
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from starlette.requests import Request

from iconbox import dependencies
from iconbox.auth import is_authorized, password_matches
from iconbox.config import Settings
from iconbox.directory import InMemoryDirectoryStore, RedisDirectoryStore
from iconbox.storage import InMemoryObjectStore


def make_request(cookie=None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", cookie.encode("latin-1")))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class CredentialCheckTests(unittest.TestCase):
    def test_matching_cookie(self):
        self.assertTrue(is_authorized(make_request("auth_token=s3cret"), "s3cret"))
        self.assertTrue(
            is_authorized(make_request("theme=dark; auth_token=s3cret"), "s3cret")
        )

    def test_missing_or_wrong_cookie(self):
        self.assertFalse(is_authorized(make_request(), "s3cret"))
        self.assertFalse(is_authorized(make_request("auth_token=nope"), "s3cret"))
        self.assertFalse(is_authorized(make_request("other=s3cret"), "s3cret"))
        self.assertFalse(
            is_authorized(make_request("auth_token=s3cret-and-more"), "s3cret")
        )

    def test_unset_secret_never_authorizes(self):
        self.assertFalse(is_authorized(make_request("auth_token="), ""))
        self.assertFalse(is_authorized(make_request("auth_token=None"), None))

    def test_password_matches(self):
        self.assertTrue(password_matches("s3cret", "s3cret"))
        self.assertFalse(password_matches("S3CRET", "s3cret"))
        self.assertFalse(password_matches(None, "s3cret"))
        self.assertFalse(password_matches("", None))


class BackendSelectionTests(unittest.TestCase):
    def setUp(self):
        dependencies._object_store = None
        dependencies._directory_store = None
        self.addCleanup(self._reset)

    def _reset(self):
        dependencies._object_store = None
        dependencies._directory_store = None

    @patch("iconbox.dependencies.get_settings")
    def test_in_memory_backends(self, mock_settings):
        mock_settings.return_value = Settings(use_in_memory_backends=True)
        store = dependencies.get_object_store()
        self.assertIsInstance(store, InMemoryObjectStore)
        self.assertIs(dependencies.get_object_store(), store)
        self.assertIsInstance(
            dependencies.get_directory_store(), InMemoryDirectoryStore
        )

    @patch("iconbox.dependencies.InMemoryObjectStore")
    @patch("iconbox.dependencies.get_settings")
    def test_concurrent_first_requests_share_one_store(
        self, mock_settings, mock_store
    ):
        mock_settings.return_value = Settings(use_in_memory_backends=True)
        built = []
        barrier = threading.Barrier(8)

        def slow_store():
            time.sleep(0.05)
            built.append(object())
            return built[-1]

        def first_request():
            barrier.wait()
            return dependencies.get_object_store()

        mock_store.side_effect = slow_store
        with ThreadPoolExecutor(max_workers=8) as pool:
            stores = list(pool.map(lambda _: first_request(), range(8)))

        self.assertEqual(len(built), 1)
        self.assertTrue(all(store is built[0] for store in stores))

    @patch("iconbox.dependencies.get_settings")
    def test_unconfigured_backends_are_unbound(self, mock_settings):
        mock_settings.return_value = Settings(
            use_in_memory_backends=False,
            s3_bucket=None,
            redis_url=None,
            database_url=None,
        )
        self.assertIsNone(dependencies.get_object_store())
        self.assertIsNone(dependencies.get_directory_store())

    @patch("iconbox.directory.redis.Redis.from_url")
    @patch("iconbox.dependencies.get_settings")
    def test_redis_preferred_for_directory(self, mock_settings, _mock_from_url):
        mock_settings.return_value = Settings(
            use_in_memory_backends=False,
            redis_url="redis://localhost:6379/0",
            database_url="sqlite+pysqlite:///:memory:",
        )
        self.assertIsInstance(dependencies.get_directory_store(), RedisDirectoryStore)


if __name__ == "__main__":
    unittest.main()
