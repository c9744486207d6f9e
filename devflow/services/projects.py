"""Project operations: validation, ownership checks and mapping to response schemas."""

import logging

from devflow.core.exceptions import ValidationError
from devflow.models.project import Project
from devflow.repositories.projects import ProjectStore
from devflow.repositories.users import CredentialStore
from devflow.schemas.project import (
    ProjectCreate,
    ProjectListItem,
    ProjectResponse,
    ProjectUpdate,
)
from devflow.services.authorization import AuthorizationGuard, load_owned

logger = logging.getLogger(__name__)

PROJECT_NAME_MAX_LEN = 200
PROJECT_DESCRIPTION_MAX_LEN = 1000
DEFAULT_MAX_PROJECTS_PER_USER = 50

PROJECT_NOT_FOUND = "Project not found"


class ProjectService:
    """
    CRUD for projects owned by the calling user.

    Every read, update and delete goes through the authorization guard; a
    project owned by someone else is reported exactly like a missing one.
    """

    def __init__(
        self,
        projects: ProjectStore,
        users: CredentialStore,
        guard: AuthorizationGuard,
        max_projects_per_user: int = DEFAULT_MAX_PROJECTS_PER_USER,
    ) -> None:
        self.projects = projects
        self.users = users
        self.guard = guard
        self.max_projects_per_user = max_projects_per_user

    def get_project(self, project_id: int, caller_id: int) -> ProjectResponse:
        project = load_owned(
            self.guard, self.projects.get_by_id(project_id), caller_id, PROJECT_NOT_FOUND
        )
        return self._to_response(project)

    def list_projects(self, caller_id: int) -> list[ProjectListItem]:
        return [
            ProjectListItem(
                id=p.id,
                name=p.name,
                description=p.description or "",
                created_at=p.created_at,
            )
            for p in self.projects.list_by_owner(caller_id)
        ]

    def create_project(self, data: ProjectCreate, caller_id: int) -> ProjectResponse:
        """Create a project owned by the caller."""
        name, description, tags = _clean_fields(data)

        if self.users.get_by_id(caller_id) is None:
            raise ValidationError("User not found")
        if self.projects.count_by_owner(caller_id) >= self.max_projects_per_user:
            raise ValidationError(
                f"Maximum {self.max_projects_per_user} projects per user"
            )

        project = self.projects.add(
            Project(name=name, description=description, owner_id=caller_id, tags=tags)
        )
        logger.info(
            "Project created", extra={"project_id": project.id, "owner_id": caller_id}
        )
        return self._to_response(project)

    def update_project(
        self, project_id: int, data: ProjectUpdate, caller_id: int
    ) -> ProjectResponse:
        project = load_owned(
            self.guard, self.projects.get_by_id(project_id), caller_id, PROJECT_NOT_FOUND
        )
        project.name, project.description, project.tags = _clean_fields(data)
        project = self.projects.update(project)
        return self._to_response(project)

    def delete_project(self, project_id: int, caller_id: int) -> None:
        project = load_owned(
            self.guard, self.projects.get_by_id(project_id), caller_id, PROJECT_NOT_FOUND
        )
        self.projects.delete(project.id)
        logger.info(
            "Project deleted", extra={"project_id": project.id, "owner_id": caller_id}
        )

    def _to_response(self, project: Project) -> ProjectResponse:
        owner = self.users.get_by_id(project.owner_id)
        return ProjectResponse(
            id=project.id,
            name=project.name,
            description=project.description or "",
            owner_id=project.owner_id,
            owner_username=owner.username if owner is not None else "Unknown",
            tags=list(project.tags or []),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


def _clean_fields(data: ProjectCreate) -> tuple[str, str, list[str]]:
    """Validate and normalize name, description and tags."""
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Project name is required")
    if len(name) > PROJECT_NAME_MAX_LEN:
        raise ValidationError(
            f"Project name cannot exceed {PROJECT_NAME_MAX_LEN} characters"
        )
    description = (data.description or "").strip()
    if len(description) > PROJECT_DESCRIPTION_MAX_LEN:
        raise ValidationError(
            f"Project description cannot exceed {PROJECT_DESCRIPTION_MAX_LEN} characters"
        )
    tags = [t.strip() for t in (data.tags or []) if t and t.strip()]
    return name, description, tags
