"""Filtered, ranked queries over one collection, and the unified cross-collection search."""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel

from portfolio_mcp.adapters.dataset_store import DatasetStore
from portfolio_mcp.models.portfolio import Project, dump_entity
from portfolio_mcp.models.query import QueryResult, SearchBreakdown, UnifiedSearchResult
from portfolio_mcp.services import relevance_service

DEFAULT_LIMIT = 10
PROJECT_SHARE = 0.7
BLOG_SHARE = 0.3

_EntityT = TypeVar("_EntityT", bound=BaseModel)


def cap(items: list[Any], limit: int) -> list[Any]:
    """First `limit` items; a zero or negative limit yields an empty list."""
    if limit <= 0:
        return []
    return items[:limit]


def _technology_terms(technology: Union[str, Sequence[str], None]) -> list[str]:
    if technology is None:
        return []
    values = [technology] if isinstance(technology, str) else list(technology)
    return [relevance_service.normalize(v) for v in values if not relevance_service.is_blank(v)]


def _uses_any(project: Project, terms: list[str]) -> bool:
    return any(
        term in relevance_service.normalize(tech) for term in terms for tech in project.technologies
    )


def _rank(
    entities: Iterable[_EntityT],
    query: str,
    scorer: Callable[[_EntityT, str], int],
) -> list[dict[str, Any]]:
    """Score, drop zero scores, sort by score descending. Ties keep load order."""
    scored: list[dict[str, Any]] = []
    for entity in entities:
        score = scorer(entity, query)
        if score > 0:
            row = dump_entity(entity)
            row["relevanceScore"] = score
            scored.append(row)
    scored.sort(key=lambda row: row["relevanceScore"], reverse=True)
    return scored


def query_projects(
    store: DatasetStore,
    query: str = "",
    *,
    category: Optional[str] = None,
    status: Optional[str] = None,
    impact: Optional[str] = None,
    technology: Union[str, Sequence[str], None] = None,
    limit: int = DEFAULT_LIMIT,
) -> QueryResult:
    query = query or ""
    projects: list[Project] = list(store.projects().projects)

    if category:
        projects = [p for p in projects if p.category.value == category]
    if status:
        projects = [p for p in projects if p.status.value == status]
    if impact:
        projects = [p for p in projects if p.impact.value == impact]
    terms = _technology_terms(technology)
    if terms:
        projects = [p for p in projects if _uses_any(p, terms)]

    if relevance_service.is_blank(query):
        rows = [dump_entity(p) for p in projects]
    else:
        rows = _rank(projects, query, relevance_service.score_project)

    return QueryResult(
        results=cap(rows, limit),
        total=len(rows),
        query=query,
        filters={
            "category": category,
            "status": status,
            "impact": impact,
            "technology": technology,
        },
    )


def query_blogs(store: DatasetStore, query: str = "", *, limit: int = DEFAULT_LIMIT) -> QueryResult:
    query = query or ""
    blogs = store.blogs().blogs
    if relevance_service.is_blank(query):
        rows = [dump_entity(b) for b in blogs]
    else:
        rows = _rank(blogs, query, relevance_service.score_blog)
    return QueryResult(results=cap(rows, limit), total=len(rows), query=query, filters={})


def search_all(store: DatasetStore, query: str = "", *, limit: int = DEFAULT_LIMIT) -> UnifiedSearchResult:
    """Fan out with a fixed 70/30 project/blog split, merge, re-rank and truncate.

    Each side is capped independently before merging, so this is not a global top-N.
    Breakdown counts are pre-truncation totals per collection.
    """
    projects = query_projects(store, query, limit=math.ceil(limit * PROJECT_SHARE))
    blogs = query_blogs(store, query, limit=math.ceil(limit * BLOG_SHARE))

    merged = [{**row, "type": "project"} for row in projects.results]
    merged.extend({**row, "type": "blog"} for row in blogs.results)
    merged.sort(key=lambda row: row.get("relevanceScore", 0), reverse=True)

    return UnifiedSearchResult(
        results=cap(merged, limit),
        total=projects.total + blogs.total,
        query=query or "",
        breakdown=SearchBreakdown(projects=projects.total, blogs=blogs.total),
    )
