"""Adapters for backing storage: the read-once JSON dataset store."""

from portfolio_mcp.adapters.dataset_store import (
    DataLoadError,
    DatasetStore,
    PortfolioStore,
    default_store,
)

__all__ = ["DataLoadError", "DatasetStore", "PortfolioStore", "default_store"]
