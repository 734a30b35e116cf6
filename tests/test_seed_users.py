"""Unit tests for app.scripts.seed_users: empty-table seeding and the prod guard."""

import unittest
from unittest.mock import patch

from app.core.security import PasswordHasher
from app.models import User
from app.scripts import seed_users as seed_module
from app.scripts.seed_users import SAMPLE_USERS, seed_users

from support import TEST_ROUNDS, create_user, make_session, make_settings, make_store, volunteer_body


class TestSeedUsers(unittest.TestCase):
    def test_seeds_empty_table(self) -> None:
        session = make_session()
        try:
            created = seed_users(session, PasswordHasher(rounds=TEST_ROUNDS))
            self.assertEqual(created, len(SAMPLE_USERS))
            emails = {u.email for u in session.query(User).all()}
            self.assertEqual(emails, {"volunteer@example.com", "ngo@example.com"})
        finally:
            session.close()

    def test_skips_when_users_exist(self) -> None:
        store = make_store()
        try:
            create_user(store, volunteer_body())
            created = seed_users(store.session, store.hasher)
            self.assertEqual(created, 0)
            self.assertEqual(store.session.query(User).count(), 1)
        finally:
            store.session.close()

    def test_main_refuses_in_prod(self) -> None:
        settings = make_settings(
            APP_ENV="prod",
            JWT_SECRET="a-real-secret",
            EMAIL_BACKEND="smtp",
            SMTP_HOST="smtp.example.com",
        )
        with patch.object(seed_module, "get_settings", return_value=settings), patch.object(
            seed_module, "seed_users"
        ) as seed:
            self.assertEqual(seed_module.main(), 1)
        seed.assert_not_called()


if __name__ == "__main__":
    unittest.main()
