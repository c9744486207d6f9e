"""Project endpoints. All require a bearer token; only the owner can see or change a project."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from devflow.api.deps import get_current_user, get_project_service
from devflow.core.exceptions import NotFoundError, ValidationError
from devflow.schemas.auth import CurrentUser
from devflow.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectsListResponse,
    ProjectUpdate,
)
from devflow.services.projects import ProjectService

router = APIRouter()


@router.get("", response_model=ProjectsListResponse)
def list_projects(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectsListResponse:
    """List the caller's projects, newest first."""
    return ProjectsListResponse(projects=service.list_projects(current_user.id))


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    request: Request,
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    """Create a project owned by the caller. Location header points at the new project."""
    try:
        project = service.create_project(body, current_user.id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    response.headers["Location"] = str(
        request.url_for("get_project", project_id=project.id)
    )
    return project


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    """Project details; 404 if it does not exist or belongs to someone else."""
    try:
        return service.get_project(project_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    body: ProjectUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    try:
        return service.update_project(project_id, body, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> Response:
    try:
        service.delete_project(project_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
