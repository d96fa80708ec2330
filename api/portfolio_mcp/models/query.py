"""Transient query result shapes built fresh per call."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueryResult(BaseModel):
    """Ranked, capped result set. total counts matches before truncation."""

    results: list[dict[str, Any]]
    total: int = Field(ge=0)
    query: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)


class SearchBreakdown(BaseModel):
    projects: int = Field(ge=0)
    blogs: int = Field(ge=0)


class UnifiedSearchResult(BaseModel):
    results: list[dict[str, Any]]
    total: int = Field(ge=0)
    query: str = ""
    breakdown: SearchBreakdown
