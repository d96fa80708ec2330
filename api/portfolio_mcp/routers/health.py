"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from portfolio_mcp.config import SERVER_NAME, SERVER_VERSION

router = APIRouter()


def _iso_utc(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class HealthResponse(BaseModel):
    """GET /api/health response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'healthy'")]
    timestamp: Annotated[str, Field(description="ISO8601 UTC")]
    server: Annotated[str, Field(description="Server name")]
    version: Annotated[str, Field(description="Semver MAJOR.MINOR.PATCH")]


@router.get("/health", response_model=HealthResponse)
async def health():
    """Return server health status."""
    return HealthResponse(
        status="healthy",
        timestamp=_iso_utc(datetime.now(timezone.utc)),
        server=SERVER_NAME,
        version=SERVER_VERSION,
    )
