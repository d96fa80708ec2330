"""Relevance scoring: additive fixed weights for case-insensitive substring matches.

Callers must not score an empty query; an empty needle would match every field.
"""

from __future__ import annotations

from portfolio_mcp.models.portfolio import BlogPost, Project, ProjectImpact

PROJECT_NAME_WEIGHT = 50
PROJECT_DESCRIPTION_WEIGHT = 30
PROJECT_TECHNOLOGY_WEIGHT = 40
PROJECT_TAG_WEIGHT = 35
PROJECT_CATEGORY_WEIGHT = 25
HIGH_IMPACT_BONUS = 5

BLOG_TITLE_WEIGHT = 50
BLOG_DESCRIPTION_WEIGHT = 30
BLOG_URL_WEIGHT = 20


def normalize(text: str | None) -> str:
    return (text or "").lower().strip()


def is_blank(query: str | None) -> bool:
    return not normalize(query)


def _contains(field: str | None, needle: str) -> bool:
    return needle in normalize(field)


def _any_contains(values: list[str], needle: str) -> bool:
    return any(_contains(value, needle) for value in values)


def score_project(project: Project, query: str) -> int:
    needle = normalize(query)
    score = 0
    if _contains(project.name, needle):
        score += PROJECT_NAME_WEIGHT
    if _contains(project.description, needle):
        score += PROJECT_DESCRIPTION_WEIGHT
    if _any_contains(project.technologies, needle):
        score += PROJECT_TECHNOLOGY_WEIGHT
    if _any_contains(project.tags, needle):
        score += PROJECT_TAG_WEIGHT
    if _contains(project.category.value, needle):
        score += PROJECT_CATEGORY_WEIGHT
    # Bonus applies only to projects that matched at least one field.
    if score > 0 and project.impact == ProjectImpact.HIGH:
        score += HIGH_IMPACT_BONUS
    return score


def score_blog(blog: BlogPost, query: str) -> int:
    needle = normalize(query)
    score = 0
    if _contains(blog.title, needle):
        score += BLOG_TITLE_WEIGHT
    if _contains(blog.description, needle):
        score += BLOG_DESCRIPTION_WEIGHT
    if _contains(blog.url, needle):
        score += BLOG_URL_WEIGHT
    return score
