"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account details. Field rules are enforced by AuthService (400 on failure)."""

    username: str = Field(..., description="Username (unique, max 50 chars)")
    email: str = Field(..., description="Email (unique, max 100 chars)")
    password: str = Field(..., description="Password (min 6 chars)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., description="Email")
    password: str = Field(..., description="Password")


class AuthResponse(BaseModel):
    """JWT access token plus a summary of the authenticated user."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user_id: int
    username: str
    email: str


class CurrentUser(BaseModel):
    """Authenticated caller resolved from the bearer token."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
