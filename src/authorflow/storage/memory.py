"""In-memory storage implementation."""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from authorflow.models.project import Project

T = TypeVar("T", bound=BaseModel)


class InMemoryStorage(Generic[T]):
    """Generic in-memory storage using dictionaries."""

    def __init__(self, id_field: str = "id"):
        self._store: dict[str, T] = {}
        self._id_field = id_field

    def get(self, id: str) -> T | None:
        """Get an item by ID."""
        return self._store.get(id)

    def create(self, item: T) -> T:
        """Create a new item."""
        item_id = getattr(item, self._id_field)
        self._store[item_id] = item
        return item

    def update(self, id: str, item: T) -> T | None:
        """Update an existing item."""
        if id not in self._store:
            return None
        self._store[id] = item
        return item

    def delete(self, id: str) -> bool:
        """Delete an item by ID."""
        if id in self._store:
            del self._store[id]
            return True
        return False

    def count(self, filter_fn: Callable[[T], bool] | None = None) -> int:
        """Count items, optionally filtered."""
        if filter_fn:
            return sum(1 for item in self._store.values() if filter_fn(item))
        return len(self._store)

    def find_one(self, filter_fn: Callable[[T], bool]) -> T | None:
        """Find a single item matching the filter."""
        for item in self._store.values():
            if filter_fn(item):
                return item
        return None

    def find_many(
        self,
        filter_fn: Callable[[T], bool],
        sort_key: str | None = None,
        sort_desc: bool = True,
    ) -> list[T]:
        """Find all items matching the filter, optionally sorted."""
        items = [item for item in self._store.values() if filter_fn(item)]
        if sort_key:
            items.sort(
                key=lambda x: getattr(x, sort_key, datetime.min),
                reverse=sort_desc,
            )
        return items


class InMemoryProjectStore:
    """Project store backed by a dictionary.

    None of the methods await between reading and writing, so each call is
    atomic with respect to other requests on the event loop.
    """

    def __init__(self) -> None:
        self.projects: InMemoryStorage[Project] = InMemoryStorage[Project]()
        self._last_timestamp = datetime.min.replace(tzinfo=UTC)

    def _now(self) -> datetime:
        # Strictly increasing so updated_at ordering is total
        now = datetime.now(UTC)
        if now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _owned(self, project_id: str, user_id: str) -> Project | None:
        project = self.projects.get(project_id)
        if project is None or project.user_id != user_id:
            return None
        return project

    async def list_for_owner(self, user_id: str) -> list[Project]:
        return self.projects.find_many(
            lambda p: p.user_id == user_id,
            sort_key="updated_at",
            sort_desc=True,
        )

    async def get_for_owner(self, project_id: str, user_id: str) -> Project | None:
        return self._owned(project_id, user_id)

    async def count_for_owner(self, user_id: str) -> int:
        return self.projects.count(lambda p: p.user_id == user_id)

    async def insert(self, fields: dict[str, Any]) -> Project:
        now = self._now()
        project = Project.model_validate(
            {**fields, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        return self.projects.create(project)

    async def update_for_owner(
        self, project_id: str, user_id: str, changes: dict[str, Any]
    ) -> Project | None:
        current = self._owned(project_id, user_id)
        if current is None:
            return None
        updated = Project.model_validate(
            {**current.model_dump(), **changes, "updated_at": self._now()}
        )
        return self.projects.update(project_id, updated)

    async def delete_for_owner(self, project_id: str, user_id: str) -> bool:
        if self._owned(project_id, user_id) is None:
            return False
        return self.projects.delete(project_id)

    def add(self, project: Project) -> Project:
        """Seed a project as-is, keeping its id and timestamps (for testing)."""
        return self.projects.create(project)
