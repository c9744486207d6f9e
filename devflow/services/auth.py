"""Registration and credential validation."""

import logging
from functools import lru_cache

from devflow.core.exceptions import (
    AuthFailure,
    EmailTaken,
    UsernameTaken,
    ValidationError,
    WeakPassword,
)
from devflow.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    PasswordHasher,
)
from devflow.models.user import User, UserRole
from devflow.repositories.users import CredentialStore, DuplicateIdentityError

logger = logging.getLogger(__name__)

_DUMMY_PASSWORD = "devflow-login-timing-equalizer"


@lru_cache
def dummy_hash(hasher: PasswordHasher) -> str:
    """
    Hash verified against when the login email is unknown, so both login
    failures cost one bcrypt check. Computed once per hasher for the life of
    the process; the app warms it at startup.
    """
    return hasher.hash_password(_DUMMY_PASSWORD)


class AuthService:
    """
    Creates users with hashed passwords and checks login credentials.

    Returns User rows on success and raises the errors in devflow.core.exceptions
    otherwise. Tokens are minted by the caller.
    """

    def __init__(self, store: CredentialStore, hasher: PasswordHasher) -> None:
        self.store = store
        self.hasher = hasher

    def register(
        self, username: str, email: str, password: str, role: UserRole = UserRole.USER
    ) -> User:
        """
        Register a new user. Check order: field shape, email taken, username taken,
        password strength. A duplicate email with a weak password reports EmailTaken.
        """
        username = (username or "").strip()
        email = (email or "").strip()
        _validate_identity_fields(username, email)

        if self.store.email_exists(email):
            raise EmailTaken()
        if self.store.username_exists(username):
            raise UsernameTaken()
        if len(password or "") < PASSWORD_MIN_LEN:
            raise WeakPassword(
                f"Password must be at least {PASSWORD_MIN_LEN} characters"
            )

        user = User(
            username=username,
            email=email,
            password_hash=self.hasher.hash_password(password),
            role=role.value,
        )
        try:
            user = self.store.add(user)
        except DuplicateIdentityError as e:
            raise (EmailTaken() if e.field == "email" else UsernameTaken()) from None

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return user

    def login(self, email: str, password: str) -> User:
        """Return the user for valid credentials; AuthFailure for unknown email or wrong password."""
        user = self.store.get_by_email((email or "").strip())
        if user is None:
            self.hasher.verify_password(password or "", dummy_hash(self.hasher))
            logger.info("Login failed")
            raise AuthFailure()
        if not self.hasher.verify_password(password or "", user.password_hash):
            logger.info("Login failed")
            raise AuthFailure()

        logger.info("Login succeeded", extra={"user_id": user.id})
        return user


def _validate_identity_fields(username: str, email: str) -> None:
    if not username:
        raise ValidationError("Username is required")
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(
            f"Username cannot exceed {USERNAME_MAX_LEN} characters"
        )
    if not email:
        raise ValidationError("Email is required")
    if len(email) > EMAIL_MAX_LEN:
        raise ValidationError(f"Email cannot exceed {EMAIL_MAX_LEN} characters")
    if "@" not in email:
        raise ValidationError("Email is invalid")
