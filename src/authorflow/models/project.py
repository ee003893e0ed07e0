"""Project models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectType(str, Enum):
    """Kinds of writing project."""

    NOVEL = "novel"
    SHORT_STORY = "short_story"
    ESSAY_COLLECTION = "essay_collection"
    NON_FICTION = "non_fiction"
    SERIES_UNIVERSE = "series_universe"
    POETRY = "poetry"
    BLOG = "blog"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# Fields a client may change; everything else is server-controlled
UPDATABLE_FIELDS = frozenset(
    {"title", "description", "type", "status", "content", "genre", "target_audience", "tags"}
)


def count_words(content: str) -> int:
    """Count maximal runs of non-whitespace characters."""
    return len(content.split())


class Project(BaseModel):
    """Project model."""

    id: str = Field(..., description="Unique project identifier")
    user_id: str = Field(..., description="ID of the user who owns this project")
    title: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    type: ProjectType
    status: ProjectStatus = Field(default=ProjectStatus.DRAFT)
    content: str = Field(default="")
    word_count: int = Field(default=0, ge=0)
    genre: str | None = Field(default=None)
    target_audience: str | None = Field(default=None)
    tags: list[str] = Field(default_factory=list)
    is_published: bool = Field(default=False)
    published_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"from_attributes": True}


class ProjectCreate(BaseModel):
    """Request to create a project.

    Title and type are checked by the service so that missing values and
    unknown types produce the same errors for every caller.
    """

    title: str | None = None
    type: str | None = None
    description: str | None = None
    genre: str | None = None
    target_audience: str | None = None
    tags: list[str] | None = None


class ProjectUpdate(BaseModel):
    """Partial update of a project.

    Unknown keys, including ``id``, ``user_id`` and ``created_at``, are
    dropped.
    """

    title: str | None = None
    description: str | None = None
    type: str | None = None
    status: str | None = None
    content: str | None = None
    genre: str | None = None
    target_audience: str | None = None
    tags: list[str] | None = None

    model_config = {"extra": "ignore"}
