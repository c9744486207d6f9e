"""Storage adapters for identities and projects (SQLAlchemy and in-memory)."""

from devflow.repositories.projects import (
    InMemoryProjectStore,
    ProjectStore,
    SqlAlchemyProjectStore,
)
from devflow.repositories.users import (
    CredentialStore,
    DuplicateIdentityError,
    InMemoryCredentialStore,
    SqlAlchemyCredentialStore,
)

__all__ = [
    "CredentialStore",
    "DuplicateIdentityError",
    "InMemoryCredentialStore",
    "InMemoryProjectStore",
    "ProjectStore",
    "SqlAlchemyCredentialStore",
    "SqlAlchemyProjectStore",
]
