"""End-to-end tests for /auth, /users and /roles routes on the in-memory database."""

import unittest
from datetime import timedelta

from fastapi.testclient import TestClient

from book_network.core.config import get_settings
from book_network.core.database import SessionLocal, engine
from book_network.core.security import PasswordHasher
from book_network.main import create_app
from book_network.models import Base, Token, User
from book_network.models.base import utcnow
from book_network.repositories import RoleRepository, TokenRepository, UserRepository

HASHER = PasswordHasher(rounds=4)


def _registration(email: str = "reader@x.com", password: str = "secret-pass") -> dict:
    return {
        "firstname": "Ada",
        "lastname": "Lovelace",
        "email": email,
        "password": password,
        "date_of_birth": "1990-01-02",
    }


class RoutesTestCase(unittest.TestCase):
    seed_roles: tuple[str, ...] = ("USER", "ADMIN")

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        db = SessionLocal()
        try:
            roles = RoleRepository(db)
            for name in self.seed_roles:
                roles.create(name)
            db.commit()
        finally:
            db.close()
        self.client = TestClient(create_app(get_settings(), SessionLocal, HASHER))

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(engine)

    def _seed_user(self, email: str, password: str, roles: tuple[str, ...], enabled: bool = True) -> None:
        db = SessionLocal()
        try:
            role_repo = RoleRepository(db)
            UserRepository(db).create(
                email=email,
                password_hash=HASHER.hash(password),
                firstname="Seed",
                lastname="User",
                enabled=enabled,
                roles=[role_repo.get_by_name(name) for name in roles],
            )
            db.commit()
        finally:
            db.close()

    def _login(self, email: str, password: str) -> str:
        response = self.client.post("/auth/authenticate", json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]


class TestRegistrationFlow(RoutesTestCase):
    def test_register_activate_authenticate(self) -> None:
        response = self.client.post("/auth/register", json=_registration())
        self.assertEqual(response.status_code, 202, response.text)
        code = response.json()["activation_token"]
        self.assertEqual(len(code), 6)

        blocked = self.client.post(
            "/auth/authenticate", json={"email": "reader@x.com", "password": "secret-pass"}
        )
        self.assertEqual(blocked.status_code, 401)
        self.assertEqual(blocked.json()["detail"], "User account is not activated.")

        activated = self.client.get("/auth/activate-account", params={"token": code})
        self.assertEqual(activated.status_code, 200, activated.text)
        self.assertEqual(activated.json()["email"], "reader@x.com")

        token = self._login("reader@x.com", "secret-pass")
        me = self.client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["authorities"], ["USER"])
        self.assertEqual(me.json()["full_name"], "Ada Lovelace")

    def test_password_is_stored_hashed(self) -> None:
        self.client.post("/auth/register", json=_registration())
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.email == "reader@x.com").one()
            self.assertNotEqual(user.password_hash, "secret-pass")
            self.assertTrue(HASHER.verify("secret-pass", user.password_hash))
            self.assertFalse(user.enabled)
        finally:
            db.close()

    def test_duplicate_email(self) -> None:
        self.assertEqual(self.client.post("/auth/register", json=_registration()).status_code, 202)
        response = self.client.post("/auth/register", json=_registration())
        self.assertEqual(response.status_code, 409)

    def test_invalid_payload(self) -> None:
        response = self.client.post("/auth/register", json=_registration(password="short"))
        self.assertEqual(response.status_code, 422)
        response = self.client.post("/auth/register", json=_registration(email="not-an-email"))
        self.assertEqual(response.status_code, 422)


class TestRegistrationWithoutDefaultRole(RoutesTestCase):
    seed_roles = ("ADMIN",)

    def test_missing_default_role(self) -> None:
        response = self.client.post("/auth/register", json=_registration())
        self.assertEqual(response.status_code, 500)
        self.assertIn("was not initialized", response.json()["detail"])


class TestActivation(RoutesTestCase):
    def _register(self) -> str:
        return self.client.post("/auth/register", json=_registration()).json()["activation_token"]

    def test_unknown_token(self) -> None:
        response = self.client.get("/auth/activate-account", params={"token": "999999x"})
        self.assertEqual(response.status_code, 400)

    def test_token_used_twice(self) -> None:
        code = self._register()
        self.assertEqual(self.client.get("/auth/activate-account", params={"token": code}).status_code, 200)
        again = self.client.get("/auth/activate-account", params={"token": code})
        self.assertEqual(again.status_code, 409)

    def test_expired_token(self) -> None:
        self._seed_user("late@x.com", "secret-pass", ("USER",), enabled=False)
        db = SessionLocal()
        try:
            user = UserRepository(db).get_by_email("late@x.com")
            now = utcnow()
            TokenRepository(db).create(
                user, "111111", created_at=now - timedelta(hours=2), expires_at=now - timedelta(hours=1)
            )
            db.commit()
        finally:
            db.close()

        response = self.client.get("/auth/activate-account", params={"token": "111111"})
        self.assertEqual(response.status_code, 410)
        db = SessionLocal()
        try:
            self.assertFalse(UserRepository(db).get_by_email("late@x.com").enabled)
            self.assertIsNone(db.query(Token).filter(Token.token == "111111").one().validated_at)
        finally:
            db.close()


class TestAuthenticate(RoutesTestCase):
    def test_wrong_password_and_unknown_email_are_indistinguishable(self) -> None:
        self._seed_user("a@x.com", "secret-pass", ("USER",))
        wrong = self.client.post("/auth/authenticate", json={"email": "a@x.com", "password": "wrong-pass"})
        unknown = self.client.post(
            "/auth/authenticate", json={"email": "nobody@x.com", "password": "secret-pass"}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(wrong.status_code, unknown.status_code)
        self.assertEqual(wrong.json(), unknown.json())

    def test_locked_account(self) -> None:
        self._seed_user("a@x.com", "secret-pass", ("USER",))
        db = SessionLocal()
        try:
            users = UserRepository(db)
            users.set_locked(users.get_by_email("a@x.com"), True)
            db.commit()
        finally:
            db.close()
        response = self.client.post("/auth/authenticate", json={"email": "a@x.com", "password": "secret-pass"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "User account is locked.")


class TestRoles(RoutesTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._seed_user("admin@x.com", "admin-pass", ("ADMIN", "USER"))
        self._seed_user("reader@x.com", "reader-pass", ("USER",))
        self.admin_headers = {"Authorization": f"Bearer {self._login('admin@x.com', 'admin-pass')}"}
        self.reader_headers = {"Authorization": f"Bearer {self._login('reader@x.com', 'reader-pass')}"}

    def test_list_requires_authentication(self) -> None:
        self.assertEqual(self.client.get("/roles").status_code, 401)

    def test_list_omits_role_holders(self) -> None:
        response = self.client.get("/roles", headers=self.reader_headers)
        self.assertEqual(response.status_code, 200)
        roles = response.json()["roles"]
        self.assertEqual([r["name"] for r in roles], ["ADMIN", "USER"])
        for role in roles:
            self.assertNotIn("users", role)

    def test_create_requires_admin(self) -> None:
        response = self.client.post("/roles", json={"name": "READER"}, headers=self.reader_headers)
        self.assertEqual(response.status_code, 403)

    def test_admin_creates_role_once(self) -> None:
        created = self.client.post("/roles", json={"name": "READER"}, headers=self.admin_headers)
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["name"], "READER")
        duplicate = self.client.post("/roles", json={"name": "READER"}, headers=self.admin_headers)
        self.assertEqual(duplicate.status_code, 409)

    def test_blank_role_name_rejected(self) -> None:
        for name in ("", "   ", "\t\n"):
            with self.subTest(name=name):
                response = self.client.post("/roles", json={"name": name}, headers=self.admin_headers)
                self.assertEqual(response.status_code, 422)
        listed = self.client.get("/roles", headers=self.admin_headers).json()["roles"]
        self.assertEqual([r["name"] for r in listed], ["ADMIN", "USER"])

    def test_role_name_is_stripped(self) -> None:
        created = self.client.post("/roles", json={"name": "  READER  "}, headers=self.admin_headers)
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["name"], "READER")


if __name__ == "__main__":
    unittest.main()
