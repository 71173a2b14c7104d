import unittest

from common import get_codec
from clientvault import config
from clientvault.auth import AuthManager
from clientvault.repositories import UserRepository
from clientvault.storage import MemoryStore


class TestAuthManager(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.users = UserRepository(self.store, get_codec())
        self.auth = AuthManager(self.users)

    def test_register_creates_user_and_logs_in(self):
        self.assertTrue(self.auth.register("admin", "s3cret"))
        self.assertTrue(self.auth.is_authenticated())

        stored = self.users.get()
        self.assertEqual(stored.username, "admin")
        self.assertNotEqual(stored.password_hash, "s3cret")
        self.assertEqual(self.auth.current_user, stored)

    def test_second_registration_rejected(self):
        self.assertTrue(self.auth.register("admin", "s3cret"))
        first = self.users.get()

        other = AuthManager(self.users)
        self.assertFalse(other.register("intruder", "pw"))
        self.assertFalse(other.is_authenticated())
        self.assertEqual(self.users.get(), first)

    def test_empty_credentials_rejected(self):
        self.assertFalse(self.auth.register("", "pw"))
        self.assertFalse(self.auth.register("admin", ""))
        self.assertFalse(self.auth.has_user())

    def test_login(self):
        self.auth.register("admin", "s3cret")
        self.auth.logout()

        fresh = AuthManager(self.users)
        self.assertFalse(fresh.login("admin", "wrong"))
        self.assertFalse(fresh.login("someone", "s3cret"))
        self.assertTrue(fresh.login("admin", "s3cret"))
        self.assertEqual(fresh.current_user.username, "admin")

    def test_login_without_account(self):
        self.assertFalse(self.auth.login("admin", "s3cret"))

    def test_logout(self):
        self.auth.register("admin", "s3cret")
        self.auth.logout()
        self.assertIsNone(self.auth.current_user)
        self.assertTrue(self.auth.has_user())

    def test_refresh_restores_session_from_storage(self):
        self.auth.register("admin", "s3cret")
        fresh = AuthManager(self.users)
        self.assertFalse(fresh.is_authenticated())

        user = fresh.refresh()
        self.assertEqual(user.username, "admin")
        self.assertTrue(fresh.is_authenticated())

    def test_refresh_ends_session_when_account_gone(self):
        self.auth.register("admin", "s3cret")
        self.store.remove(config.BUCKET_USER)

        self.assertIsNone(self.auth.refresh())
        self.assertFalse(self.auth.is_authenticated())

    def test_refresh_ends_session_when_account_unreadable(self):
        self.auth.register("admin", "s3cret")
        self.store.write(config.BUCKET_USER, "corrupted")

        with self.assertLogs('clientvault.repositories', level='ERROR'):
            self.assertIsNone(self.auth.refresh())


if __name__ == '__main__':
    unittest.main()
