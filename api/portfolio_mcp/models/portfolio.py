"""Portfolio dataset models: projects, blog posts and their collection metadata."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProjectCategory(str, Enum):
    API = "api"
    WEB_APP = "web-app"
    MOBILE_APP = "mobile-app"
    ML = "ml"
    UTILITY = "utility"


class ProjectStatus(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    PROTOTYPE = "prototype"
    ARCHIVED = "archived"


class ProjectImpact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Project(BaseModel):
    """One portfolio project. Unknown keys from the dataset are kept and passed through."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(min_length=1)
    name: str
    description: str
    technologies: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    category: ProjectCategory
    status: ProjectStatus
    impact: ProjectImpact
    created: str
    links: dict[str, str] = Field(default_factory=dict)
    highlights: list[str] = Field(default_factory=list)


class BlogPost(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
    url: str
    description: str = ""


class ProjectMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    status_counts: dict[str, int] = Field(default_factory=dict)
    last_updated: str | None = None


class BlogMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    topics: list[str] = Field(default_factory=list)
    categories: Any = None
    last_updated: str | None = None


class ProjectCollection(BaseModel):
    """projects.json top-level document."""

    model_config = ConfigDict(frozen=True)

    projects: tuple[Project, ...]
    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)


class BlogCollection(BaseModel):
    """blogs.json top-level document."""

    model_config = ConfigDict(frozen=True)

    blogs: tuple[BlogPost, ...]
    metadata: BlogMetadata = Field(default_factory=BlogMetadata)


def dump_entity(entity: BaseModel) -> dict[str, Any]:
    """Plain JSON-ready dict for a project or blog post (enum values, extra keys kept)."""
    return entity.model_dump(mode="json")
