"""Tests for the create_user CLI against an in-memory SQLite database."""

import contextlib
import io
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from devflow.models import Base, User
from devflow.scripts import create_user


class TestCreateUser(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        patcher = patch.object(create_user, "SessionLocal", self.Session)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("admin", "admin@x.com", "secret1", "admin")
        self.assertEqual(code, 0)
        self.assertIn("Created user 'admin'", out)
        db = self.Session()
        try:
            user = db.query(User).filter(User.email == "admin@x.com").one()
            self.assertEqual(user.role, "admin")
            self.assertTrue(user.password_hash.startswith("$2b$"))
        finally:
            db.close()

    def test_duplicate_is_rejected(self) -> None:
        self.assertEqual(self._run("alice", "alice@x.com", "secret1")[0], 0)
        code, _, err = self._run("alice2", "alice@x.com", "secret1")
        self.assertEqual(code, 1)
        self.assertIn("Email already registered", err)

    def test_weak_password_is_rejected(self) -> None:
        code, _, err = self._run("alice", "alice@x.com", "123")
        self.assertEqual(code, 1)
        self.assertIn("at least 6", err)


if __name__ == "__main__":
    unittest.main()
