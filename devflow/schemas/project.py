"""Request/response schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    """Fields a client may set when creating a project. Lengths are checked by the service."""

    name: str = Field(..., description="Project name (required, max 200 chars)")
    description: str | None = Field(
        default=None, description="Project description (optional, max 1000 chars)"
    )
    tags: list[str] | None = Field(
        default=None, description='Tags for categorization, e.g. ["backend", "api"]'
    )


class ProjectUpdate(ProjectCreate):
    """Replacement values for an existing project."""


class ProjectResponse(BaseModel):
    """Full project details. Owner is exposed by id and username only."""

    id: int
    name: str
    description: str
    owner_id: int
    owner_username: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime | None = None


class ProjectListItem(BaseModel):
    """Lighter project entry for lists (no owner, no tags)."""

    id: int
    name: str
    description: str
    created_at: datetime


class ProjectsListResponse(BaseModel):
    """Response for GET /projects."""

    projects: list[ProjectListItem]
