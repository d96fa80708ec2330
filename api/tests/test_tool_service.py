"""Tests for tool dispatch, payload shapes and tool errors."""

from __future__ import annotations

import json

import pytest

from portfolio_mcp.services import tool_service
from portfolio_mcp.services.tool_service import ToolValidationError, UnknownToolError


def _payload(store, name: str, arguments: dict):
    envelope = tool_service.call_tool(store, name, arguments)
    assert len(envelope.content) == 1
    assert envelope.content[0].type == "text"
    return json.loads(envelope.content[0].text)


def test_catalog_lists_nine_tools() -> None:
    names = [tool.name for tool in tool_service.list_tools()]
    assert names == [
        "query_projects",
        "get_project",
        "list_projects",
        "get_project_stats",
        "query_blogs",
        "get_blog",
        "list_blogs",
        "get_blog_stats",
        "search_all",
    ]
    dumped = tool_service.TOOLS_BY_NAME["query_projects"].model_dump(by_alias=True)
    assert dumped["inputSchema"]["required"] == ["query"]


def test_unknown_tool_raises_with_message(store) -> None:
    with pytest.raises(UnknownToolError) as exc_info:
        tool_service.call_tool(store, "bogus_tool", {})
    assert str(exc_info.value) == "Unknown tool: bogus_tool"


@pytest.mark.parametrize("name", ["query_projects", "query_blogs", "search_all", "get_project"])
def test_missing_required_argument(store, name: str) -> None:
    with pytest.raises(ToolValidationError, match="Missing required argument"):
        tool_service.call_tool(store, name, {})


def test_query_projects_payload(store) -> None:
    payload = _payload(store, "query_projects", {"query": "python", "limit": 2})
    assert payload["query"] == "python"
    assert payload["found"] == 3
    assert [row["id"] for row in payload["results"]] == ["snake-game", "pyflow"]


def test_query_projects_accepts_filters_and_string_limit(store) -> None:
    payload = _payload(
        store,
        "query_projects",
        {"query": "", "technology": "python", "status": "archived", "limit": "5"},
    )
    assert payload["found"] == 1
    assert payload["results"][0]["id"] == "old-scraper"


def test_query_projects_technology_accepts_a_list(store) -> None:
    payload = _payload(store, "query_projects", {"query": "", "technology": ["go", "kotlin"]})
    assert [row["id"] for row in payload["results"]] == ["vision-api", "chat-mobile"]


def test_query_projects_reads_only_declared_arguments(store) -> None:
    payload = _payload(store, "query_projects", {"query": "", "technologies": "go"})
    assert payload["found"] == 5
    schema = tool_service.TOOLS_BY_NAME["query_projects"].input_schema
    assert "technologies" not in schema["properties"]
    assert schema["properties"]["technology"]["type"] == ["string", "array"]


@pytest.mark.parametrize("limit", ["ten", True, 2.5, [1]])
def test_bad_limit_is_rejected(store, limit) -> None:
    with pytest.raises(ToolValidationError, match="limit"):
        tool_service.call_tool(store, "query_blogs", {"query": "x", "limit": limit})


def test_non_string_query_is_rejected(store) -> None:
    with pytest.raises(ToolValidationError, match="'query' must be a string"):
        tool_service.call_tool(store, "query_projects", {"query": 42})


def test_arguments_must_be_an_object(store) -> None:
    with pytest.raises(ToolValidationError, match="must be an object"):
        tool_service.call_tool(store, "list_projects", ["x"])


def test_get_project_found_and_not_found(store) -> None:
    assert _payload(store, "get_project", {"id": "pyflow"})["name"] == "Data Flow"
    assert _payload(store, "get_project", {"id": "missing"}) == tool_service.PROJECT_NOT_FOUND


def test_list_projects_payload(store) -> None:
    payload = _payload(store, "list_projects", {"sortBy": "name", "order": "asc"})
    assert payload["totalProjects"] == 5
    assert payload["projects"][0]["id"] == "chat-mobile"
    assert payload["metadata"]["last_updated"] == "2025-02-01"


def test_get_project_stats_payload(store) -> None:
    payload = _payload(store, "get_project_stats", {})
    assert payload["totalProjects"] == 5
    assert len(payload["recentProjects"]) == 3


def test_query_blogs_payload(store) -> None:
    payload = _payload(store, "query_blogs", {"query": "api"})
    assert payload["found"] == 1
    assert payload["results"][0]["title"] == "Designing an API"
    assert payload["results"][0]["relevanceScore"] == 70


def test_get_blog_by_title_and_url(store) -> None:
    assert _payload(store, "get_blog", {"title": "packaging"})["url"] == "https://blog.example/packaging"
    by_url = _payload(store, "get_blog", {"url": "https://blog.example/mobile-testing"})
    assert by_url["title"] == "Mobile Testing"


def test_get_blog_not_found_is_a_payload(store) -> None:
    payload = _payload(store, "get_blog", {"url": "https://no-such.example/"})
    assert payload["error"] == "Blog not found"
    assert payload["suggestion"]


@pytest.mark.parametrize("arguments", [{}, {"title": "   "}, {"title": "", "url": ""}])
def test_get_blog_without_title_or_url_is_not_found(store, arguments) -> None:
    assert _payload(store, "get_blog", arguments) == {
        "error": "Blog not found",
        "suggestion": "Use list_blogs to see available posts",
    }


def test_list_blogs_and_stats_payloads(store) -> None:
    listed = _payload(store, "list_blogs", {})
    assert listed["totalBlogs"] == 4
    assert listed["blogs"][0]["title"] == "Designing an API"
    assert listed["metadata"]["topics"] == ["python", "api", "rust"]
    stats = _payload(store, "get_blog_stats", {})
    assert stats["topicDistribution"]["python"] == 3


def test_search_all_payload(store) -> None:
    payload = _payload(store, "search_all", {"query": "python", "limit": 4})
    assert payload["query"] == "python"
    assert payload["breakdown"] == {"projects": 3, "blogs": 3}
    assert payload["totalFound"] == 6
    assert len(payload["results"]) <= 4
    assert {row["type"] for row in payload["results"]} <= {"project", "blog"}


def test_identical_calls_produce_identical_text(store) -> None:
    first = tool_service.call_tool(store, "search_all", {"query": "python"})
    second = tool_service.call_tool(store, "search_all", {"query": "python"})
    assert first.content[0].text == second.content[0].text
