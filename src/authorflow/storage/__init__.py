"""Project storage backends."""

from authorflow.storage.base import ProjectStore
from authorflow.storage.memory import InMemoryProjectStore
from authorflow.storage.postgrest import PostgrestProjectStore

__all__ = ["InMemoryProjectStore", "PostgrestProjectStore", "ProjectStore"]
