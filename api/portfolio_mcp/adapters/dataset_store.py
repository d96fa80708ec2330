"""PortfolioStore: read-once, lazily loaded project and blog collections.

Each collection is parsed and validated on first access, then cached for the
lifetime of the store. Initialisation is guarded by a lock so concurrent first
callers never double-load or observe a partially built collection. There is no
invalidation; new data needs a new store (or a process restart).
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from portfolio_mcp import config
from portfolio_mcp.models.portfolio import BlogCollection, ProjectCollection

log = logging.getLogger(__name__)

_CollectionT = TypeVar("_CollectionT", bound=BaseModel)


class DataLoadError(RuntimeError):
    """A backing dataset is missing or malformed."""


class DatasetStore(Protocol):
    """Read-only access to both collections. Implementations: PortfolioStore."""

    def projects(self) -> ProjectCollection:
        ...

    def blogs(self) -> BlogCollection:
        ...


def _read_collection(path: Path, model: type[_CollectionT], key: str) -> _CollectionT:
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as exc:
        raise DataLoadError(f"Dataset not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Dataset is not valid JSON: {path} ({exc.msg} at line {exc.lineno})") from exc
    except OSError as exc:
        raise DataLoadError(f"Dataset could not be read: {path} ({exc})") from exc

    if not isinstance(raw, dict) or not isinstance(raw.get(key), list):
        raise DataLoadError(f"Dataset {path} must be an object with a '{key}' list")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise DataLoadError(
            f"Dataset {path} failed validation ({exc.error_count()} errors): {exc.errors()[0]['msg']}"
        ) from exc


class PortfolioStore:
    """File-backed DatasetStore. Paths default to the configured data directory."""

    def __init__(
        self,
        projects_path: Optional[Path | str] = None,
        blogs_path: Optional[Path | str] = None,
    ) -> None:
        self._projects_path = Path(projects_path) if projects_path else config.projects_path()
        self._blogs_path = Path(blogs_path) if blogs_path else config.blogs_path()
        self._projects: ProjectCollection | None = None
        self._blogs: BlogCollection | None = None
        self._lock = threading.Lock()

    @property
    def projects_path(self) -> Path:
        return self._projects_path

    @property
    def blogs_path(self) -> Path:
        return self._blogs_path

    def projects(self) -> ProjectCollection:
        if self._projects is None:
            with self._lock:
                if self._projects is None:
                    collection = _read_collection(self._projects_path, ProjectCollection, "projects")
                    seen: set[str] = set()
                    for project in collection.projects:
                        if project.id in seen:
                            raise DataLoadError(
                                f"Dataset {self._projects_path} has duplicate project id '{project.id}'"
                            )
                        seen.add(project.id)
                    log.info(
                        "dataset_loaded kind=projects count=%s path=%s",
                        len(collection.projects),
                        self._projects_path,
                    )
                    self._projects = collection
        return self._projects

    def blogs(self) -> BlogCollection:
        if self._blogs is None:
            with self._lock:
                if self._blogs is None:
                    collection = _read_collection(self._blogs_path, BlogCollection, "blogs")
                    log.info(
                        "dataset_loaded kind=blogs count=%s path=%s",
                        len(collection.blogs),
                        self._blogs_path,
                    )
                    self._blogs = collection
        return self._blogs

    def is_loaded(self) -> bool:
        return self._projects is not None and self._blogs is not None


_DEFAULT_STORE: PortfolioStore | None = None
_DEFAULT_STORE_LOCK = threading.Lock()


def default_store() -> PortfolioStore:
    """Process-wide store built from configuration, created once."""
    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        with _DEFAULT_STORE_LOCK:
            if _DEFAULT_STORE is None:
                _DEFAULT_STORE = PortfolioStore()
    return _DEFAULT_STORE
