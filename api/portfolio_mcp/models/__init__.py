"""Pydantic models."""

from portfolio_mcp.models.error import ErrorDetail
from portfolio_mcp.models.portfolio import (
    BlogCollection,
    BlogPost,
    Project,
    ProjectCollection,
)
from portfolio_mcp.models.query import QueryResult, UnifiedSearchResult
from portfolio_mcp.models.tool import ToolCallResponse, ToolDefinition

__all__ = [
    "BlogCollection",
    "BlogPost",
    "ErrorDetail",
    "Project",
    "ProjectCollection",
    "QueryResult",
    "ToolCallResponse",
    "ToolDefinition",
    "UnifiedSearchResult",
]
