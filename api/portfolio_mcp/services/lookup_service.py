"""Exact/partial key lookups and full listings sorted with typed per-field comparators."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from portfolio_mcp.adapters.dataset_store import DatasetStore
from portfolio_mcp.models.portfolio import BlogPost, Project, dump_entity
from portfolio_mcp.services.relevance_service import normalize

log = logging.getLogger(__name__)

DEFAULT_PROJECT_SORT = ("created", "desc")
DEFAULT_BLOG_SORT = ("title", "asc")

IMPACT_RANK = {"low": 0, "medium": 1, "high": 2}
STATUS_RANK = {"archived": 0, "prototype": 1, "development": 2, "production": 3}

_DATE_FORMATS = ("%Y-%m", "%Y")


def parse_date(value: Any) -> Optional[datetime]:
    """Parse ISO dates plus YYYY-MM and YYYY. Returns None when unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _string_key(value: Any) -> Any:
    if not isinstance(value, str):
        return None
    return (value.casefold(), value)


def _date_key(value: Any) -> Any:
    parsed = parse_date(value)
    return parsed.timestamp() if parsed is not None else None


def _rank_key(ranks: dict[str, int]) -> Callable[[Any], Any]:
    def key(value: Any) -> Any:
        return ranks.get(value) if isinstance(value, str) else None

    return key


def _length_key(value: Any) -> Any:
    return len(value) if isinstance(value, (list, tuple, dict)) else None


PROJECT_FIELD_KEYS: dict[str, Callable[[Any], Any]] = {
    "id": _string_key,
    "name": _string_key,
    "description": _string_key,
    "category": _string_key,
    "status": _rank_key(STATUS_RANK),
    "impact": _rank_key(IMPACT_RANK),
    "created": _date_key,
    "technologies": _length_key,
    "tags": _length_key,
    "highlights": _length_key,
    "links": _length_key,
}

BLOG_FIELD_KEYS: dict[str, Callable[[Any], Any]] = {
    "title": _string_key,
    "url": _string_key,
    "description": _string_key,
}


def sort_rows(
    rows: list[dict[str, Any]],
    sort_by: str,
    order: str,
    field_keys: dict[str, Callable[[Any], Any]],
) -> list[dict[str, Any]]:
    """Sort a copy of rows by one field.

    Rows whose value is missing or cannot be compared always come last, in load
    order, whatever the direction. Unknown fields leave load order untouched.
    """
    key_fn = field_keys.get(sort_by)
    if key_fn is None:
        log.debug("sort_field_unknown field=%s", sort_by)
        return list(rows)

    keyed = [(key_fn(row.get(sort_by)), row) for row in rows]
    present = [(k, row) for k, row in keyed if k is not None]
    missing = [row for k, row in keyed if k is None]
    present.sort(key=lambda pair: pair[0], reverse=(order or "").lower() != "asc")
    return [row for _k, row in present] + missing


def get_project_by_id(store: DatasetStore, project_id: str) -> Optional[Project]:
    for project in store.projects().projects:
        if project.id == project_id:
            return project
    return None


def get_blog_by_title(store: DatasetStore, title: str) -> Optional[BlogPost]:
    """First blog, in load order, whose title equals or contains `title` (case-insensitive)."""
    needle = normalize(title)
    if not needle:
        return None
    for blog in store.blogs().blogs:
        candidate = normalize(blog.title)
        if candidate == needle or needle in candidate:
            return blog
    return None


def get_blog_by_url(store: DatasetStore, url: str) -> Optional[BlogPost]:
    for blog in store.blogs().blogs:
        if blog.url == url:
            return blog
    return None


def list_projects(
    store: DatasetStore,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> list[dict[str, Any]]:
    rows = [dump_entity(p) for p in store.projects().projects]
    return sort_rows(
        rows,
        sort_by or DEFAULT_PROJECT_SORT[0],
        order or DEFAULT_PROJECT_SORT[1],
        PROJECT_FIELD_KEYS,
    )


def list_blogs(
    store: DatasetStore,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> list[dict[str, Any]]:
    rows = [dump_entity(b) for b in store.blogs().blogs]
    return sort_rows(
        rows,
        sort_by or DEFAULT_BLOG_SORT[0],
        order or DEFAULT_BLOG_SORT[1],
        BLOG_FIELD_KEYS,
    )
