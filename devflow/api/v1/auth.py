"""Registration, login and current-identity endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from devflow.api.deps import get_auth_service, get_current_user, get_token_codec
from devflow.core.exceptions import (
    AuthFailure,
    ConflictError,
    PasswordHashTimeout,
    ValidationError,
)
from devflow.core.tokens import TokenCodec
from devflow.models.user import User
from devflow.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from devflow.services.auth import AuthService

router = APIRouter()


def _auth_response(user: User, codec: TokenCodec) -> AuthResponse:
    return AuthResponse(
        access_token=codec.issue(user),
        token_type="bearer",
        user_id=user.id,
        username=user.username,
        email=user.email,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthResponse:
    """
    Create an account and return a JWT access token for it.
    400 for invalid fields or a weak password, 409 if the email or username is taken.
    """
    try:
        user = service.register(body.username, body.email, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except PasswordHashTimeout as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e
    return _auth_response(user, codec)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        user = service.login(body.email, body.password)
    except AuthFailure as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except PasswordHashTimeout as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e
    return _auth_response(user, codec)


@router.get("/me", response_model=CurrentUser)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the identity carried by the bearer token."""
    return current_user
