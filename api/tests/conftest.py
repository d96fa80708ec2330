"""Pytest configuration and fixtures.

Every test gets its own small dataset written to tmp_path and a fresh
PortfolioStore over it, so no test depends on the bundled data.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio_mcp.adapters.dataset_store import PortfolioStore  # noqa: E402

PROJECTS_DOC: dict[str, Any] = {
    "projects": [
        {
            "id": "pyflow",
            "name": "Data Flow",
            "description": "Pipeline orchestrator",
            "technologies": ["Python", "Airflow"],
            "tags": ["etl"],
            "category": "utility",
            "status": "production",
            "impact": "medium",
            "created": "2024-03-10",
            "links": {"github": "https://github.com/example/pyflow"},
            "highlights": ["Runs nightly"],
        },
        {
            "id": "snake-game",
            "name": "Python Snake",
            "description": "Classic game written in python",
            "technologies": ["Pygame"],
            "tags": ["games", "python"],
            "category": "web-app",
            "status": "prototype",
            "impact": "low",
            "created": "2023-07-01",
            "links": {},
            "highlights": [],
        },
        {
            "id": "vision-api",
            "name": "Vision API",
            "description": "Image classification service",
            "technologies": ["Go", "TensorFlow"],
            "tags": ["ml"],
            "category": "api",
            "status": "production",
            "impact": "high",
            "created": "2025-01-15",
            "links": {"docs": "https://vision.example/docs"},
            "highlights": ["p99 under 80ms", "Batch endpoint"],
        },
        {
            "id": "chat-mobile",
            "name": "Chat Mobile",
            "description": "Messaging app with an api backend",
            "technologies": ["Kotlin"],
            "tags": ["chat"],
            "category": "mobile-app",
            "status": "development",
            "impact": "high",
            "created": "not-a-date",
            "links": {},
            "highlights": [],
        },
        {
            "id": "old-scraper",
            "name": "Old Scraper",
            "description": "Archived web scraper",
            "technologies": ["Python", "BeautifulSoup"],
            "tags": ["crawling"],
            "category": "utility",
            "status": "archived",
            "impact": "low",
            "created": "2022-11",
            "links": {},
            "highlights": [],
        },
    ],
    "metadata": {
        "status_counts": {"production": 2, "prototype": 1, "development": 1, "archived": 1},
        "last_updated": "2025-02-01",
    },
}

BLOGS_DOC: dict[str, Any] = {
    "blogs": [
        {
            "title": "Getting Started with Python",
            "url": "https://blog.example/python-start",
            "description": "A gentle introduction to the language",
        },
        {
            "title": "Python Packaging in Depth",
            "url": "https://blog.example/packaging",
            "description": "Wheels, sdists and pyproject",
        },
        {
            "title": "Designing an API",
            "url": "https://blog.example/api-design",
            "description": "Resources, verbs and python examples",
        },
        {
            "title": "Mobile Testing",
            "url": "https://blog.example/mobile-testing",
            "description": "Device farms and flaky tests",
        },
    ],
    "metadata": {
        "topics": ["python", "api", "rust"],
        "categories": ["tutorials"],
        "last_updated": "2025-03-01",
    },
}


def write_json(path: Path, payload: Any) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def projects_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "projects.json", PROJECTS_DOC)


@pytest.fixture
def blogs_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "blogs.json", BLOGS_DOC)


@pytest.fixture
def store(projects_file: Path, blogs_file: Path) -> PortfolioStore:
    """Fresh store over the fixture datasets."""
    return PortfolioStore(projects_path=projects_file, blogs_path=blogs_file)
