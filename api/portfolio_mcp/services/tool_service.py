"""Tool catalog and dispatch.

A tool call is (name, arguments) and returns a text envelope whose text is the
JSON-serialized payload. Unknown tools and bad arguments raise ToolError
subclasses; a lookup miss is a normal payload carrying error + suggestion.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional

from portfolio_mcp.adapters.dataset_store import DatasetStore
from portfolio_mcp.models.portfolio import dump_entity
from portfolio_mcp.models.tool import ToolCallResponse, ToolContent, ToolDefinition
from portfolio_mcp.services import lookup_service, query_service, stats_service

log = logging.getLogger(__name__)

PROJECT_NOT_FOUND = {
    "error": "Project not found",
    "suggestion": "Use list_projects to see available project ids",
}
BLOG_NOT_FOUND = {
    "error": "Blog not found",
    "suggestion": "Use list_blogs to see available posts",
}


class ToolError(ValueError):
    """Base class for errors surfaced to the caller as a failed request."""


class UnknownToolError(ToolError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolValidationError(ToolError):
    pass


_LIMIT_SCHEMA = {"type": "integer", "description": "Maximum number of results", "default": 10}
_SORT_ORDER_SCHEMA = {"type": "string", "enum": ["asc", "desc"], "description": "Sort direction"}

TOOLS: list[ToolDefinition] = [
    ToolDefinition(
        name="query_projects",
        description="Search portfolio projects by keyword with optional category, status, impact and technology filters",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Free-text search; empty returns filtered projects unranked"},
                "category": {"type": "string", "enum": ["api", "web-app", "mobile-app", "ml", "utility"]},
                "status": {"type": "string", "enum": ["production", "development", "prototype", "archived"]},
                "impact": {"type": "string", "enum": ["high", "medium", "low"]},
                "technology": {
                    "type": ["string", "array"],
                    "items": {"type": "string"},
                    "description": "Technology substring, e.g. python; a list matches any of them",
                },
                "limit": _LIMIT_SCHEMA,
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="get_project",
        description="Get full details of one project by id",
        inputSchema={
            "type": "object",
            "properties": {"id": {"type": "string", "description": "Project id"}},
            "required": ["id"],
        },
    ),
    ToolDefinition(
        name="list_projects",
        description="List all projects sorted by a field",
        inputSchema={
            "type": "object",
            "properties": {
                "sortBy": {"type": "string", "description": "Field to sort by", "default": "created"},
                "order": {**_SORT_ORDER_SCHEMA, "default": "desc"},
            },
        },
    ),
    ToolDefinition(
        name="get_project_stats",
        description="Technology, category, impact and status distributions plus the most recent projects",
        inputSchema={"type": "object", "properties": {}},
    ),
    ToolDefinition(
        name="query_blogs",
        description="Search blog posts by keyword in title, description and url",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Free-text search"},
                "limit": _LIMIT_SCHEMA,
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="get_blog",
        description="Get one blog post by title (exact or partial) or by exact url",
        inputSchema={
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Title or part of it"},
                "url": {"type": "string", "description": "Exact post url"},
            },
        },
    ),
    ToolDefinition(
        name="list_blogs",
        description="List all blog posts sorted by a field",
        inputSchema={
            "type": "object",
            "properties": {
                "sortBy": {"type": "string", "description": "Field to sort by", "default": "title"},
                "order": {**_SORT_ORDER_SCHEMA, "default": "asc"},
            },
        },
    ),
    ToolDefinition(
        name="get_blog_stats",
        description="Topic distribution and the first posts of the blog collection",
        inputSchema={"type": "object", "properties": {}},
    ),
    ToolDefinition(
        name="search_all",
        description="Search projects and blog posts together (70% projects, 30% posts)",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Free-text search"},
                "limit": _LIMIT_SCHEMA,
            },
            "required": ["query"],
        },
    ),
]

TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def list_tools() -> list[ToolDefinition]:
    return list(TOOLS)


def _str_arg(args: Mapping[str, Any], name: str) -> Optional[str]:
    value = args.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ToolValidationError(f"Argument '{name}' must be a string")
    return value


def _limit_arg(args: Mapping[str, Any], default: int = query_service.DEFAULT_LIMIT) -> int:
    value = args.get("limit")
    if value is None:
        return default
    if isinstance(value, bool):
        raise ToolValidationError("Argument 'limit' must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ToolValidationError("Argument 'limit' must be an integer")


def _technology_arg(args: Mapping[str, Any]) -> Any:
    value = args.get("technology")
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return value
    raise ToolValidationError("Argument 'technology' must be a string or a list of strings")


def _query_projects(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    result = query_service.query_projects(
        store,
        _str_arg(args, "query") or "",
        category=_str_arg(args, "category"),
        status=_str_arg(args, "status"),
        impact=_str_arg(args, "impact"),
        technology=_technology_arg(args),
        limit=_limit_arg(args),
    )
    return {"query": result.query, "found": result.total, "results": result.results}


def _get_project(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    project = lookup_service.get_project_by_id(store, _str_arg(args, "id") or "")
    return dump_entity(project) if project is not None else dict(PROJECT_NOT_FOUND)


def _list_projects(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    projects = lookup_service.list_projects(store, _str_arg(args, "sortBy"), _str_arg(args, "order"))
    return {
        "totalProjects": len(projects),
        "projects": projects,
        "metadata": store.projects().metadata.model_dump(mode="json"),
    }


def _query_blogs(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    result = query_service.query_blogs(store, _str_arg(args, "query") or "", limit=_limit_arg(args))
    return {"query": result.query, "found": result.total, "results": result.results}


def _get_blog(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    title = _str_arg(args, "title")
    url = _str_arg(args, "url")
    if url:
        blog = lookup_service.get_blog_by_url(store, url)
    else:
        blog = lookup_service.get_blog_by_title(store, title or "")
    return dump_entity(blog) if blog is not None else dict(BLOG_NOT_FOUND)


def _list_blogs(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    blogs = lookup_service.list_blogs(store, _str_arg(args, "sortBy"), _str_arg(args, "order"))
    return {
        "totalBlogs": len(blogs),
        "blogs": blogs,
        "metadata": store.blogs().metadata.model_dump(mode="json"),
    }


def _search_all(store: DatasetStore, args: Mapping[str, Any]) -> dict[str, Any]:
    result = query_service.search_all(store, _str_arg(args, "query") or "", limit=_limit_arg(args))
    return {
        "query": result.query,
        "totalFound": result.total,
        "breakdown": result.breakdown.model_dump(),
        "results": result.results,
    }


_HANDLERS: dict[str, Callable[[DatasetStore, Mapping[str, Any]], dict[str, Any]]] = {
    "query_projects": _query_projects,
    "get_project": _get_project,
    "list_projects": _list_projects,
    "get_project_stats": lambda store, _args: stats_service.project_stats(store),
    "query_blogs": _query_blogs,
    "get_blog": _get_blog,
    "list_blogs": _list_blogs,
    "get_blog_stats": lambda store, _args: stats_service.blog_stats(store),
    "search_all": _search_all,
}


def text_envelope(payload: Any) -> ToolCallResponse:
    return ToolCallResponse(content=[ToolContent(type="text", text=json.dumps(payload, indent=2))])


def run_tool(store: DatasetStore, name: str, arguments: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Validate arguments and return the raw payload for one tool call."""
    tool = TOOLS_BY_NAME.get(name)
    handler = _HANDLERS.get(name)
    if tool is None or handler is None:
        raise UnknownToolError(name)
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ToolValidationError("Tool arguments must be an object")
    for required in tool.required_arguments():
        if arguments.get(required) is None:
            raise ToolValidationError(f"Missing required argument: {required}")
    return handler(store, arguments)


def call_tool(store: DatasetStore, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolCallResponse:
    payload = run_tool(store, name, arguments)
    log.debug("tool_called name=%s", name)
    return text_envelope(payload)
