"""Password hashing and verification for authentication."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Protocol, TypeVar

import bcrypt

from devflow.core.exceptions import PasswordHashTimeout

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 11 keeps a hash in the tens of milliseconds on current hardware.
DEFAULT_BCRYPT_ROUNDS = 11

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Field limits for identity validation.
USERNAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
PASSWORD_MIN_LEN = 6

T = TypeVar("T")


class PasswordHasher(Protocol):
    """Password hashing/verification contract."""

    def hash_password(self, password: str) -> str:
        """Return a salted, self-describing one-way hash of the password."""
        ...

    def verify_password(self, password: str, hashed: str) -> bool:
        """Return True only if the password matches the hash; False for malformed hashes."""
        ...


class BcryptPasswordHasher:
    """
    bcrypt hasher. The cost factor and salt are embedded in every hash
    ($2b$<rounds>$...), so verification works across changes to `rounds`.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False


class ThreadedPasswordHasher:
    """
    Runs another PasswordHasher on a dedicated thread pool so CPU-bound hashing
    does not starve request threads. Each call waits at most `timeout` seconds;
    on timeout the pending job is cancelled and PasswordHashTimeout is raised.
    """

    def __init__(
        self,
        inner: PasswordHasher,
        max_workers: int = 4,
        timeout: float | None = 5.0,
    ) -> None:
        self.inner = inner
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="password-hash",
        )

    def _run(self, fn: Callable[..., T], *args: str) -> T:
        future: Future[T] = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(
                "Password hashing exceeded %.2fs; request aborted", self.timeout or 0.0
            )
            raise PasswordHashTimeout() from None

    def hash_password(self, password: str) -> str:
        return self._run(self.inner.hash_password, password)

    def verify_password(self, password: str, hashed: str) -> bool:
        return self._run(self.inner.verify_password, password, hashed)

    def shutdown(self) -> None:
        """Stop accepting work and drop queued jobs."""
        self._executor.shutdown(wait=False, cancel_futures=True)
