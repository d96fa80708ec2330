"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path

SERVER_NAME = "portfolio-mcp-server"
SERVER_VERSION = "1.0.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def data_dir() -> Path:
    configured = os.getenv("PORTFOLIO_DATA_DIR", "").strip()
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "data"


def projects_path() -> Path:
    configured = os.getenv("PORTFOLIO_PROJECTS_PATH", "").strip()
    return Path(configured) if configured else data_dir() / "projects.json"


def blogs_path() -> Path:
    configured = os.getenv("PORTFOLIO_BLOGS_PATH", "").strip()
    return Path(configured) if configured else data_dir() / "blogs.json"


def allowed_origins() -> list[str]:
    raw = os.getenv("ALLOWED_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def log_level() -> int:
    name = os.getenv("PORTFOLIO_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> logging.Logger:
    """Attach one stderr handler to the package logger tree (idempotent)."""
    logger = logging.getLogger("portfolio_mcp")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(log_level())
    return logger
