"""Tests for the operator CLIs: change_role exit codes and prompts, create_user bootstrap."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from app.scripts import change_role, create_user
from app.services.account_store import AccountStore
from app.services.accounts import AccountService
from tests.support import make_session_factory


class ScriptTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.session = self.factory()
        self.service = AccountService(AccountStore(self.session))
        self.service.register("Alice", "alice@x.com", "Passw0rd!")

    def tearDown(self) -> None:
        self.session.close()

    def role_of(self, email: str) -> str:
        self.session.expire_all()
        return AccountStore(self.session).find_by_email(email).role

    def run_script(self, module, argv: list[str], answers: list[str] | None = None) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with (
            patch.object(module, "SessionLocal", self.factory),
            patch("builtins.input", side_effect=answers or []),
            redirect_stdout(out),
            redirect_stderr(err),
        ):
            code = module.main(argv)
        return code, out.getvalue(), err.getvalue()


class TestChangeRole(ScriptTestCase):
    def test_interactive_promotion(self) -> None:
        code, out, _ = self.run_script(change_role, [], ["alice@x.com", "ADMIN", "y"])
        self.assertEqual(code, 0)
        self.assertIn("User role updated successfully!", out)
        self.assertIn("New Role: ADMIN", out)
        self.assertEqual(self.role_of("alice@x.com"), "ADMIN")

    def test_declined_confirmation_exits_zero_without_change(self) -> None:
        code, out, _ = self.run_script(change_role, [], ["alice@x.com", "ADMIN", "n"])
        self.assertEqual(code, 0)
        self.assertIn("Operation cancelled", out)
        self.assertEqual(self.role_of("alice@x.com"), "USER")

    def test_unknown_email_exits_one(self) -> None:
        code, _, err = self.run_script(change_role, ["--email", "nobody@x.com"])
        self.assertEqual(code, 1)
        self.assertIn("User not found", err)

    def test_invalid_role_exits_one(self) -> None:
        code, _, err = self.run_script(change_role, ["--email", "alice@x.com", "--role", "ROOT"])
        self.assertEqual(code, 1)
        self.assertIn("Invalid role", err)
        self.assertEqual(self.role_of("alice@x.com"), "USER")

    def test_yes_flag_skips_prompt(self) -> None:
        code, _, _ = self.run_script(
            change_role, ["--email", "alice@x.com", "--role", "ADMIN", "--yes"]
        )
        self.assertEqual(code, 0)
        self.assertEqual(self.role_of("alice@x.com"), "ADMIN")


class TestCreateUser(ScriptTestCase):
    def test_creates_admin(self) -> None:
        code, out, _ = self.run_script(
            create_user, ["Root", "root@x.com", "Adm1n!pass", "ADMIN"]
        )
        self.assertEqual(code, 0)
        self.assertIn("root@x.com", out)
        self.assertEqual(self.role_of("root@x.com"), "ADMIN")

    def test_duplicate_email_exits_one(self) -> None:
        code, _, err = self.run_script(create_user, ["Alice", "alice@x.com", "Passw0rd!"])
        self.assertEqual(code, 1)
        self.assertIn("Email already registered", err)

    def test_weak_password_exits_one(self) -> None:
        code, _, err = self.run_script(create_user, ["Bob", "bob@x.com", "weak"])
        self.assertEqual(code, 1)
        self.assertIn("password", err)


if __name__ == "__main__":
    unittest.main()
