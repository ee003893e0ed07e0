"""Project service: ownership, tier quota and publishing."""

import logging
from datetime import UTC, datetime
from typing import Any

from authorflow.auth.gateway import IdentityGateway
from authorflow.config import get_tier_config
from authorflow.errors.exceptions import (
    InvalidArgumentError,
    InvalidProjectTypeError,
    MissingFieldsError,
    ProjectNotFoundError,
    QuotaExceededError,
    UserNotFoundError,
)
from authorflow.models.project import (
    UPDATABLE_FIELDS,
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectType,
    count_words,
)
from authorflow.models.responses import ProjectUsage
from authorflow.models.user import Identity, User
from authorflow.storage.base import ProjectStore

logger = logging.getLogger(__name__)

PROJECT_TYPES = [t.value for t in ProjectType]
PROJECT_STATUSES = [s.value for s in ProjectStatus]


def _parse_type(value: Any) -> ProjectType:
    try:
        return ProjectType(value)
    except ValueError:
        raise InvalidProjectTypeError(str(value), PROJECT_TYPES) from None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class ProjectService:
    """Service for project CRUD scoped to the calling user."""

    def __init__(self, store: ProjectStore, identity: IdentityGateway):
        self._store = store
        self._identity = identity

    async def list_projects(self, caller: Identity) -> list[Project]:
        """List the caller's projects, most recently updated first."""
        return await self._store.list_for_owner(caller.id)

    async def get_project(self, caller: Identity, project_id: str) -> Project:
        """
        Get a project by ID.

        Raises:
            ProjectNotFoundError: If the project doesn't exist or belongs to
                someone else; the two cases are not distinguished.
        """
        project = await self._store.get_for_owner(project_id, caller.id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def _get_profile(self, caller: Identity) -> User:
        profile = await self._identity.get_profile(caller.id)
        if profile is None:
            raise UserNotFoundError()
        return profile

    async def get_usage(self, caller: Identity, profile: User | None = None) -> ProjectUsage:
        """Project quota usage for the caller."""
        profile = profile or await self._get_profile(caller)
        limit = get_tier_config(profile.subscription_tier).max_projects
        used = await self._store.count_for_owner(caller.id)
        return ProjectUsage(
            tier=profile.subscription_tier.value,
            limit=limit,
            used=used,
            remaining=None if limit is None else max(limit - used, 0),
        )

    async def create_project(self, caller: Identity, request: ProjectCreate) -> Project:
        """
        Create a new project for the caller.

        The count and the insert are separate round trips with no
        reservation, so two concurrent requests at the limit can both pass.

        Raises:
            MissingFieldsError: If title or type is missing
            InvalidProjectTypeError: If type is not a known project type
            UserNotFoundError: If the caller has no profile row
            QuotaExceededError: If the caller's tier limit is reached
        """
        if _is_blank(request.title) or not request.type:
            raise MissingFieldsError("Title and type are required")
        project_type = _parse_type(request.type)

        profile = await self._get_profile(caller)
        tier_config = get_tier_config(profile.subscription_tier)
        project_count = await self._store.count_for_owner(caller.id)

        if not tier_config.allows_another_project(project_count):
            raise QuotaExceededError(
                tier=profile.subscription_tier.value,
                limit=tier_config.max_projects or 0,
                used=project_count,
            )

        project = await self._store.insert(
            {
                "user_id": caller.id,
                "title": request.title,
                "description": request.description or None,
                "type": project_type,
                "status": ProjectStatus.DRAFT,
                "content": "",
                "word_count": 0,
                "genre": request.genre or None,
                "target_audience": request.target_audience or None,
                "tags": request.tags or [],
                "is_published": False,
            }
        )

        logger.info(
            "Created project %s for user %s (%s/%s)",
            project.id,
            caller.id,
            project_count + 1,
            tier_config.max_projects or "unbounded",
        )
        return project

    def _clean_changes(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Drop server-controlled fields and validate the rest."""
        cleaned = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        if "title" in cleaned and _is_blank(cleaned["title"]):
            raise MissingFieldsError("Title cannot be empty")

        if "type" in cleaned:
            cleaned["type"] = _parse_type(cleaned["type"])

        if "status" in cleaned:
            try:
                status = ProjectStatus(cleaned["status"])
            except ValueError:
                raise InvalidArgumentError(
                    f"Invalid project status. Must be one of: {', '.join(PROJECT_STATUSES)}",
                    details={"status": cleaned["status"], "allowed": PROJECT_STATUSES},
                ) from None
            if status == ProjectStatus.PUBLISHED:
                raise InvalidArgumentError("Use the publish endpoint to publish a project")
            cleaned["status"] = status
            # Leaving the published state unpublishes; published_at is kept
            cleaned["is_published"] = False

        if "content" in cleaned:
            content = cleaned["content"]
            if not isinstance(content, str):
                raise InvalidArgumentError("Content must be a string")
            cleaned["word_count"] = count_words(content)

        if "tags" in cleaned and cleaned["tags"] is None:
            cleaned["tags"] = []

        return cleaned

    async def update_project(
        self,
        caller: Identity,
        project_id: str,
        changes: dict[str, Any],
    ) -> Project:
        """
        Apply a partial update to one of the caller's projects.

        ``id``, ``user_id``, ``created_at`` and the derived fields are ignored
        if supplied. ``word_count`` is recomputed whenever ``content`` changes.
        """
        cleaned = self._clean_changes(changes)
        if not cleaned:
            return await self.get_project(caller, project_id)

        project = await self._store.update_for_owner(project_id, caller.id, cleaned)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def delete_project(self, caller: Identity, project_id: str) -> None:
        """Permanently delete one of the caller's projects."""
        deleted = await self._store.delete_for_owner(project_id, caller.id)
        if not deleted:
            raise ProjectNotFoundError(project_id)
        logger.info("Deleted project %s for user %s", project_id, caller.id)

    async def publish_project(self, caller: Identity, project_id: str) -> Project:
        """Mark a project published; all three publish fields change in one write."""
        project = await self._store.update_for_owner(
            project_id,
            caller.id,
            {
                "is_published": True,
                "status": ProjectStatus.PUBLISHED,
                "published_at": datetime.now(UTC),
            },
        )
        if project is None:
            raise ProjectNotFoundError(project_id)
        logger.info("Published project %s for user %s", project_id, caller.id)
        return project
