"""
FastAPI dependencies: explicit construction of the auth collaborators and the
bearer-token session boundary (get_current_user).

Every collaborator is built here from Settings; services never read settings
themselves. Tests swap any of these via app.dependency_overrides.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from devflow.core.config import get_settings
from devflow.core.database import get_db
from devflow.core.security import BcryptPasswordHasher, PasswordHasher, ThreadedPasswordHasher
from devflow.core.tokens import JwtTokenCodec, TokenCodec, TokenError
from devflow.repositories.projects import ProjectStore, SqlAlchemyProjectStore
from devflow.repositories.users import CredentialStore, SqlAlchemyCredentialStore
from devflow.schemas.auth import CurrentUser
from devflow.services.auth import AuthService
from devflow.services.authorization import AuthorizationGuard, OwnershipGuard
from devflow.services.projects import ProjectService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

INVALID_TOKEN_DETAIL = "Invalid or expired token"


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide token codec (immutable, safe to share across requests)."""
    return JwtTokenCodec.from_settings(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """bcrypt on a dedicated, bounded worker pool."""
    settings = get_settings()
    return ThreadedPasswordHasher(
        BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        max_workers=settings.PASSWORD_HASH_WORKERS,
        timeout=settings.PASSWORD_HASH_TIMEOUT_SEC,
    )


@lru_cache
def get_authorization_guard() -> AuthorizationGuard:
    return OwnershipGuard()


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    return SqlAlchemyCredentialStore(db)


def get_project_store(
    db: Annotated[Session, Depends(get_db)],
) -> ProjectStore:
    return SqlAlchemyProjectStore(db)


def get_auth_service(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    return AuthService(store, hasher)


def get_project_service(
    projects: Annotated[ProjectStore, Depends(get_project_store)],
    users: Annotated[CredentialStore, Depends(get_credential_store)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
) -> ProjectService:
    return ProjectService(
        projects,
        users,
        guard,
        max_projects_per_user=get_settings().MAX_PROJECTS_PER_USER,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the caller identity from its claims.
    Raises 401 if missing or invalid. Every token failure gets the same response body;
    the specific reason is only logged.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    result = codec.validate(credentials.credentials)
    if isinstance(result, TokenError):
        logger.info("Rejected bearer token", extra={"reason": result.reason.value})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser(id=result.user_id, username=result.username, email=result.email)
