"""
Identity persistence: lookup by id/email/username and insert.

Uniqueness of email and username is guaranteed by the storage itself (unique
indexes for SQL, explicit checks for the in-memory store). A collision on
insert raises DuplicateIdentityError naming the field.
"""

import itertools
import logging
import threading
from datetime import UTC, datetime
from typing import Literal, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devflow.models.user import User

logger = logging.getLogger(__name__)

IdentityField = Literal["email", "username"]

# SQLSTATE for unique_violation (PostgreSQL).
_PG_UNIQUE_VIOLATION = "23505"


def _duplicate_field(error: IntegrityError) -> IdentityField | None:
    """
    Which identity column a unique violation hit, or None if the error is not
    a unique violation on users.email / users.username. PostgreSQL names the
    index (ix_users_email); SQLite names the column (users.email).
    """
    orig = error.orig
    message = str(orig)
    pgcode = getattr(orig, "pgcode", None)
    if pgcode is not None:
        if pgcode != _PG_UNIQUE_VIOLATION:
            return None
    elif "UNIQUE constraint failed" not in message:
        return None
    for field in ("email", "username"):
        if f"ix_users_{field}" in message or f"users.{field}" in message:
            return field
    return None


class DuplicateIdentityError(Exception):
    """Insert violated the unique constraint on email or username."""

    def __init__(self, field: IdentityField) -> None:
        self.field = field
        super().__init__(f"Duplicate {field}")


class CredentialStore(Protocol):
    def get_by_id(self, user_id: int) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def email_exists(self, email: str) -> bool: ...

    def username_exists(self, username: str) -> bool: ...

    def add(self, user: User) -> User:
        """Persist a new user; assigns id and created_at. Raises DuplicateIdentityError."""
        ...


class SqlAlchemyCredentialStore:
    """CredentialStore backed by the users table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def email_exists(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def username_exists(self, username: str) -> bool:
        return (
            self.db.query(User.id).filter(User.username == username).first() is not None
        )

    def add(self, user: User) -> User:
        user.created_at = datetime.now(UTC)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            field = _duplicate_field(e)
            if field is None:
                raise
            logger.info("User insert hit unique constraint on %s", field)
            raise DuplicateIdentityError(field) from None
        self.db.refresh(user)
        return user


class InMemoryCredentialStore:
    """Process-local CredentialStore for tests and local tooling."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def add(self, user: User) -> User:
        with self._lock:
            if self.get_by_email(user.email) is not None:
                raise DuplicateIdentityError("email")
            if self.get_by_username(user.username) is not None:
                raise DuplicateIdentityError("username")
            user.id = next(self._ids)
            user.created_at = datetime.now(UTC)
            self._users[user.id] = user
        return user
