"""Project endpoints."""

from fastapi import APIRouter, Request, status

from folio.db import projects_repository as repo
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import (
    build_payload,
    parse_request_body,
    require_fields,
    uuid_param,
)
from folio.web.schemas import MessageResponse, ProjectInput, ProjectResponse

router = APIRouter(prefix="/api/projects", tags=["projects"])

REQUIRED_FIELDS = ["title"]


@router.get("", response_model=list[ProjectResponse])
async def list_projects() -> list[ProjectResponse]:
    """List all projects, newest first."""
    with database_errors("fetch projects"):
        projects = repo.list_projects()

    return [ProjectResponse.model_validate(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(request: Request) -> ProjectResponse:
    """Create a new project."""
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(ProjectInput, body)

    with database_errors("create project"):
        project = repo.create_project(**payload.model_dump())

    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str) -> ProjectResponse:
    """Get a specific project by ID."""
    project_id = uuid_param(project_id, "project")

    with database_errors("fetch project"):
        project = repo.get_project(project_id)

    if project is None:
        raise ApiError(404, "Project not found")

    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(project_id: str, request: Request) -> ProjectResponse:
    """Update a project."""
    project_id = uuid_param(project_id, "project")
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(ProjectInput, body)

    with database_errors("update project"):
        project = repo.update_project(project_id, **payload.model_dump())

    if project is None:
        raise ApiError(404, "Project not found")

    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: str) -> MessageResponse:
    """Delete a project by ID."""
    project_id = uuid_param(project_id, "project")

    with database_errors("delete project"):
        deleted = repo.delete_project(project_id)

    if not deleted:
        raise ApiError(404, "Project not found")

    return MessageResponse(message="Project deleted successfully")
