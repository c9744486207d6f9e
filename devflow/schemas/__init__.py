"""Pydantic request/response schemas."""

from devflow.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from devflow.schemas.health import HealthResponse
from devflow.schemas.project import (
    ProjectCreate,
    ProjectListItem,
    ProjectResponse,
    ProjectsListResponse,
    ProjectUpdate,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "ProjectCreate",
    "ProjectListItem",
    "ProjectResponse",
    "ProjectUpdate",
    "ProjectsListResponse",
    "RegisterRequest",
]
