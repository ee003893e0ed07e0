"""Project endpoints."""

from fastapi import APIRouter, Depends, status

from authorflow.auth.dependencies import get_current_identity
from authorflow.models.project import ProjectCreate, ProjectUpdate
from authorflow.models.responses import (
    MessageResponse,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectResponse,
)
from authorflow.models.user import Identity
from authorflow.services.container import get_project_service
from authorflow.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List Projects",
    description="List all projects of the authenticated user.",
)
async def list_projects(
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    """Results are sorted by last update (newest first)."""
    projects = await project_service.list_projects(caller)
    return ProjectListResponse(data=projects, count=len(projects))


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get Project",
)
async def get_project(
    project_id: str,
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    """Projects of other users are reported as not found."""
    project = await project_service.get_project(caller, project_id)
    return ProjectResponse(data=project)


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
)
async def create_project(
    request: ProjectCreate,
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectMutationResponse:
    """
    Create a project.

    **Tier Limits:**
    - Free: 3 projects
    - Pro, Plus: unlimited

    Reaching the limit returns 403.
    """
    project = await project_service.create_project(caller, request)
    return ProjectMutationResponse(data=project, message="Project created successfully")


@router.patch(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Update Project",
)
async def update_project(
    project_id: str,
    request: ProjectUpdate,
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectMutationResponse:
    """
    Partially update a project.

    `id`, `user_id` and `created_at` are ignored. Sending `content`
    recomputes `word_count`.
    """
    project = await project_service.update_project(
        caller, project_id, request.model_dump(exclude_unset=True)
    )
    return ProjectMutationResponse(data=project, message="Project updated successfully")


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete Project",
)
async def delete_project(
    project_id: str,
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> MessageResponse:
    """Deletion is permanent."""
    await project_service.delete_project(caller, project_id)
    return MessageResponse(message="Project deleted successfully")


@router.post(
    "/{project_id}/publish",
    response_model=ProjectMutationResponse,
    summary="Publish Project",
)
async def publish_project(
    project_id: str,
    caller: Identity = Depends(get_current_identity),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectMutationResponse:
    project = await project_service.publish_project(caller, project_id)
    return ProjectMutationResponse(data=project, message="Project published successfully")
