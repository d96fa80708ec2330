"""Descriptive statistics over each collection."""

from __future__ import annotations

from collections import Counter
from typing import Any

from portfolio_mcp.adapters.dataset_store import DatasetStore
from portfolio_mcp.services.lookup_service import parse_date
from portfolio_mcp.services.relevance_service import normalize

RECENT_COUNT = 3


def _recent_projects(projects) -> list[dict[str, Any]]:
    """Newest first by created date; unparseable dates sort last in load order."""
    dated = []
    undated = []
    for project in projects:
        parsed = parse_date(project.created)
        if parsed is None:
            undated.append(project)
        else:
            dated.append((parsed, project))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    ordered = [p for _d, p in dated] + undated
    return [{"id": p.id, "name": p.name, "created": p.created} for p in ordered[:RECENT_COUNT]]


def project_stats(store: DatasetStore) -> dict[str, Any]:
    collection = store.projects()
    projects = collection.projects

    technologies: Counter[str] = Counter()
    for project in projects:
        technologies.update(project.technologies)

    return {
        "totalProjects": len(projects),
        "statusDistribution": dict(collection.metadata.status_counts),
        "technologyDistribution": dict(technologies),
        "categoryDistribution": dict(Counter(p.category.value for p in projects)),
        "impactDistribution": dict(Counter(p.impact.value for p in projects)),
        "recentProjects": _recent_projects(projects),
        "lastUpdated": collection.metadata.last_updated,
    }


def blog_stats(store: DatasetStore) -> dict[str, Any]:
    collection = store.blogs()
    blogs = collection.blogs
    haystacks = [normalize(f"{b.title} {b.description}") for b in blogs]

    topics: dict[str, int] = {}
    for topic in collection.metadata.topics:
        needle = normalize(topic)
        topics[topic] = sum(1 for text in haystacks if needle and needle in text)

    # No date field on blog posts: "recent" is dataset order.
    recent = [{"title": b.title, "url": b.url} for b in blogs[:RECENT_COUNT]]

    return {
        "totalBlogs": len(blogs),
        "topicDistribution": topics,
        "recentBlogs": recent,
        "categories": collection.metadata.categories,
        "lastUpdated": collection.metadata.last_updated,
    }
