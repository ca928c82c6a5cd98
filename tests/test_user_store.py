"""Integration tests for the SQLAlchemy user store and the account service against in-memory SQLite."""

import unittest

from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from accounts.core.security import BcryptPasswordHasher, JwtTokenIssuer
from accounts.models import Base, User
from accounts.repositories.users import SqlAlchemyUserStore
from accounts.schemas.auth import UserUpdate
from accounts.services.account_service import AccountService
from accounts.services.authenticator import Authenticator, StoreAuthenticationProvider

SECRET = "test-secret-key-for-unit-tests-only"


class SqliteTestCase(unittest.TestCase):
    """Fresh in-memory database per test."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine, autoflush=False)()
        self.store = SqlAlchemyUserStore(self.session)

    def tearDown(self) -> None:
        self.session.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()


class TestSqlAlchemyUserStore(SqliteTestCase):
    def test_save_assigns_id_and_created_at(self) -> None:
        user = self.store.save(User(email="a@example.com", password_hash="h", role="USER"))
        self.assertIsNotNone(user.id)
        self.assertIsNotNone(user.created_at)

    def test_find_by_id_and_email(self) -> None:
        saved = self.store.save(User(email="a@example.com", password_hash="h", role="USER"))
        self.assertEqual(self.store.find_by_id(saved.id).email, "a@example.com")
        self.assertEqual(self.store.find_by_email("a@example.com").id, saved.id)
        self.assertIsNone(self.store.find_by_id(saved.id + 100))
        self.assertIsNone(self.store.find_by_email("missing@example.com"))

    def test_find_all_ordered_by_id(self) -> None:
        for email in ("c@example.com", "a@example.com", "b@example.com"):
            self.store.save(User(email=email, password_hash="h", role="USER"))
        ids = [u.id for u in self.store.find_all()]
        self.assertEqual(ids, sorted(ids))
        self.assertEqual(len(ids), 3)

    def test_duplicate_email_raises_and_rolls_back(self) -> None:
        self.store.save(User(email="a@example.com", password_hash="h", role="USER"))
        with self.assertRaises(IntegrityError):
            self.store.save(User(email="a@example.com", password_hash="h2", role="USER"))
        # Session is usable after the rollback.
        self.assertEqual(len(self.store.find_all()), 1)

    def test_delete_by_id(self) -> None:
        saved = self.store.save(User(email="a@example.com", password_hash="h", role="USER"))
        # The instance is expired after the delete commits; keep the id first.
        user_id = saved.id
        self.store.delete_by_id(user_id)
        self.assertIsNone(self.store.find_by_id(user_id))


class TestAccountLifecycle(SqliteTestCase):
    """End-to-end: real store, bcrypt hasher and JWT issuer."""

    def setUp(self) -> None:
        super().setUp()
        hasher = BcryptPasswordHasher(rounds=4)
        self.tokens = JwtTokenIssuer(SECRET, access_expire_minutes=60, refresh_expire_minutes=120)
        self.service = AccountService(
            store=self.store,
            hasher=hasher,
            tokens=self.tokens,
            authenticator=Authenticator(StoreAuthenticationProvider(self.store, hasher)),
        )

    def _register(self, email: str = "test@example.com", role: str = "USER") -> int:
        response = self.service.register(
            email=email, password="password123", name="Test", city="Paris", role=role
        )
        self.assertEqual(response.status_code, 200)
        return response.our_users.id

    def test_register_stores_hash_not_plaintext(self) -> None:
        user_id = self._register()
        stored = self.store.find_by_id(user_id)
        self.assertEqual(stored.email, "test@example.com")
        self.assertNotEqual(stored.password_hash, "password123")

    def test_duplicate_registration_is_a_500(self) -> None:
        self._register()
        response = self.service.register(email="test@example.com", password="password123")
        self.assertEqual(response.status_code, 500)
        self.assertIsNotNone(response.error)

    def test_login_then_refresh(self) -> None:
        self._register(role="ADMIN")
        login = self.service.login("test@example.com", "password123")
        self.assertEqual(login.status_code, 200)
        self.assertEqual(login.role, "ADMIN")
        self.assertEqual(login.expiration_time, "1Hrs")
        self.assertEqual(self.tokens.decode(login.token)["role"], "ADMIN")

        refreshed = self.service.refresh_token(login.refresh_token)
        self.assertEqual(refreshed.status_code, 200)
        self.assertEqual(refreshed.refresh_token, login.refresh_token)
        self.assertTrue(self.tokens.validate(refreshed.token, "test@example.com"))

    def test_refresh_with_access_token_is_rejected(self) -> None:
        self._register()
        login = self.service.login("test@example.com", "password123")
        response = self.service.refresh_token(login.token)
        self.assertEqual(response.status_code, 500)
        self.assertIsNone(response.token)

    def test_update_rejects_short_password(self) -> None:
        with self.assertRaises(ValidationError):
            UserUpdate(password="x")
        # Empty means "leave unchanged".
        self.assertEqual(UserUpdate(password="").password, "")

    def test_login_with_wrong_password(self) -> None:
        self._register()
        response = self.service.login("test@example.com", "not-the-password")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.message, "Bad credentials")
        self.assertIsNone(response.token)

    def test_refresh_after_user_deleted_is_rejected(self) -> None:
        user_id = self._register()
        login = self.service.login("test@example.com", "password123")
        self.service.delete_user(user_id)
        response = self.service.refresh_token(login.refresh_token)
        self.assertEqual(response.status_code, 500)
        self.assertIsNone(response.token)

    def test_get_all_users_is_repeatable(self) -> None:
        self._register("a@example.com")
        self._register("b@example.com")
        first = self.service.get_all_users()
        second = self.service.get_all_users()
        self.assertEqual(first.our_users_list, second.our_users_list)
        self.assertEqual([u.email for u in first.our_users_list], ["a@example.com", "b@example.com"])

    def test_update_password_allows_login_with_new_password(self) -> None:
        user_id = self._register()
        response = self.service.update_user(user_id, UserUpdate(password="brand-new-pass", role="ADMIN"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.our_users.role, "USER")
        self.assertEqual(self.service.login("test@example.com", "brand-new-pass").status_code, 200)
        self.assertEqual(self.service.login("test@example.com", "password123").status_code, 500)

    def test_delete_then_lookup(self) -> None:
        user_id = self._register()
        self.assertEqual(self.service.delete_user(user_id).status_code, 200)
        self.assertEqual(self.service.get_users_by_id(user_id).status_code, 404)
        self.assertEqual(self.service.delete_user(user_id).status_code, 404)


if __name__ == "__main__":
    unittest.main()
