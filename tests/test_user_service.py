"""Unit tests for salon_api.services.users: profile, password, activation, listing, deletion."""

import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_api.core.errors import ConflictError, NotFoundError, UnauthorizedError
from salon_api.core.roles import UserRole
from salon_api.models import Base, User
from salon_api.schemas.user import UpdateProfileRequest
from salon_api.services.users import MAX_PAGE_SIZE, UserService
from tests.support import PASSWORD


class UserServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine, autoflush=False)()
        self.service = UserService(bcrypt_rounds=4)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def _add_user(
        self,
        email: str,
        role: UserRole = UserRole.CUSTOMER,
        is_active: bool = True,
    ) -> User:
        user = User(
            email=email,
            first_name="Test",
            last_name="User",
            role=role.value,
            is_active=is_active,
        )
        user.set_password(PASSWORD, rounds=4)
        self.db.add(user)
        self.db.commit()
        return user


class TestGetUser(UserServiceTestCase):
    def test_found(self) -> None:
        user = self._add_user("a@example.com")
        self.assertEqual(self.service.get_user(self.db, user.id).email, "a@example.com")

    def test_missing_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.service.get_user(self.db, 404)
        self.assertEqual(ctx.exception.message, "User not found")


class TestUpdateProfile(UserServiceTestCase):
    def test_only_provided_fields_change(self) -> None:
        user = self._add_user("a@example.com")
        updated = self.service.update_profile(
            self.db, user.id, UpdateProfileRequest(phone="+14155550100")
        )
        self.assertEqual(updated.phone, "+14155550100")
        self.assertEqual(updated.first_name, "Test")
        self.assertEqual(updated.last_name, "User")

    def test_names_updated(self) -> None:
        user = self._add_user("a@example.com")
        updated = self.service.update_profile(
            self.db, user.id, UpdateProfileRequest(first_name="Alicia", last_name="Jones")
        )
        self.assertEqual((updated.first_name, updated.last_name), ("Alicia", "Jones"))


class TestChangePassword(UserServiceTestCase):
    def test_wrong_current_password(self) -> None:
        user = self._add_user("a@example.com")
        with self.assertRaises(UnauthorizedError):
            self.service.change_password(self.db, user.id, "Nope-12345", "Newpassw0rd")

    def test_same_password_conflicts(self) -> None:
        user = self._add_user("a@example.com")
        with self.assertRaises(ConflictError):
            self.service.change_password(self.db, user.id, PASSWORD, PASSWORD)

    def test_password_rehashed(self) -> None:
        user = self._add_user("a@example.com")
        old_hash = user.password_hash
        self.service.change_password(self.db, user.id, PASSWORD, "Newpassw0rd")
        self.db.refresh(user)
        self.assertNotEqual(user.password_hash, old_hash)
        self.assertTrue(user.check_password("Newpassw0rd"))
        self.assertFalse(user.check_password(PASSWORD))


class TestActivation(UserServiceTestCase):
    def test_deactivate_then_activate(self) -> None:
        user = self._add_user("a@example.com")
        self.service.deactivate(self.db, user.id)
        self.assertFalse(self.service.get_user(self.db, user.id).is_active)
        self.service.activate(self.db, user.id)
        self.assertTrue(self.service.get_user(self.db, user.id).is_active)

    def test_activate_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.activate(self.db, 12)


class TestSetRole(UserServiceTestCase):
    def test_promotes_to_admin(self) -> None:
        user = self._add_user("a@example.com")
        self.assertEqual(self.service.set_role(self.db, user.id, UserRole.ADMIN).role, UserRole.ADMIN)


class TestListUsers(UserServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._add_user("c1@example.com")
        self._add_user("c2@example.com", is_active=False)
        self._add_user("c3@example.com")
        self._add_user("admin@example.com", role=UserRole.ADMIN)

    def test_newest_first_with_pagination(self) -> None:
        page = self.service.list_users(self.db, page=1, limit=3)
        self.assertEqual(
            [u.email for u in page.users],
            ["admin@example.com", "c3@example.com", "c2@example.com"],
        )
        self.assertEqual(page.pagination.total, 4)
        self.assertEqual(page.pagination.total_pages, 2)
        second = self.service.list_users(self.db, page=2, limit=3)
        self.assertEqual([u.email for u in second.users], ["c1@example.com"])

    def test_filters(self) -> None:
        admins = self.service.list_users(self.db, role=UserRole.ADMIN)
        self.assertEqual([u.email for u in admins.users], ["admin@example.com"])
        inactive = self.service.list_users(self.db, is_active=False)
        self.assertEqual([u.email for u in inactive.users], ["c2@example.com"])

    def test_limit_clamped(self) -> None:
        page = self.service.list_users(self.db, page=0, limit=10_000)
        self.assertEqual(page.pagination.page, 1)
        self.assertEqual(page.pagination.limit, MAX_PAGE_SIZE)


class TestDeleteUser(UserServiceTestCase):
    def test_hard_delete(self) -> None:
        user = self._add_user("a@example.com")
        user_id = user.id
        self.service.delete_user(self.db, user_id)
        self.assertIsNone(self.db.get(User, user_id))

    def test_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.delete_user(self.db, 77)


if __name__ == "__main__":
    unittest.main()
