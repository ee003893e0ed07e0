"""Project store interface."""

from typing import Any, Protocol

from authorflow.models.project import Project


class ProjectStore(Protocol):
    """Owner-scoped access to the projects table.

    Every read and write is filtered by ``user_id`` in the query itself, so a
    caller can never observe or touch a row owned by someone else.
    """

    async def list_for_owner(self, user_id: str) -> list[Project]:
        """All projects of a user, most recently updated first."""
        ...

    async def get_for_owner(self, project_id: str, user_id: str) -> Project | None:
        ...

    async def count_for_owner(self, user_id: str) -> int:
        ...

    async def insert(self, fields: dict[str, Any]) -> Project:
        """Insert a row; the store assigns ``id`` and timestamps."""
        ...

    async def update_for_owner(
        self, project_id: str, user_id: str, changes: dict[str, Any]
    ) -> Project | None:
        """Apply ``changes`` and refresh ``updated_at``; ``None`` if no row matched."""
        ...

    async def delete_for_owner(self, project_id: str, user_id: str) -> bool:
        ...
