"""Ownership authorization for user-owned resources."""

from enum import Enum
from typing import Protocol, TypeVar

from devflow.core.exceptions import NotFoundError


class Decision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


class AuthorizationGuard(Protocol):
    def authorize(self, caller_id: int, owner_id: int) -> Decision: ...


class OwnershipGuard:
    """Allows an operation only when the caller is the resource's owner."""

    def authorize(self, caller_id: int, owner_id: int) -> Decision:
        return Decision.ALLOWED if caller_id == owner_id else Decision.DENIED


class Owned(Protocol):
    owner_id: int


R = TypeVar("R", bound=Owned)


def load_owned(
    guard: AuthorizationGuard,
    resource: R | None,
    caller_id: int,
    not_found_message: str,
) -> R:
    """
    Return the resource if it exists and the guard allows the caller.

    A denied resource raises exactly the same NotFoundError as a missing one,
    so callers cannot probe for other users' resources.
    """
    if resource is None:
        raise NotFoundError(not_found_message)
    if guard.authorize(caller_id, resource.owner_id) is not Decision.ALLOWED:
        raise NotFoundError(not_found_message)
    return resource
