"""Tool call API routes.

POST /api/call runs one tool; GET /api/tools lists the catalog.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio_mcp.adapters.dataset_store import DatasetStore
from portfolio_mcp.config import env_flag
from portfolio_mcp.models.error import ErrorDetail
from portfolio_mcp.models.tool import ToolCallResponse, ToolListResponse
from portfolio_mcp.services import tool_service

router = APIRouter()
logger = logging.getLogger(__name__)


def get_store(request: Request) -> DatasetStore:
    return request.app.state.store


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorDetail(error=message).model_dump())


@router.get("/tools", response_model=ToolListResponse)
async def list_tools() -> ToolListResponse:
    return ToolListResponse(tools=tool_service.list_tools())


@router.post(
    "/call",
    response_model=ToolCallResponse,
    responses={400: {"model": ErrorDetail}, 500: {"model": ErrorDetail}},
)
async def call_tool(request: Request, store: DatasetStore = Depends(get_store)):
    try:
        body: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _bad_request("Request body must be valid JSON")
    if not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")

    name = body.get("name")
    arguments = body.get("arguments")
    if not name:
        return _bad_request("Tool name is required")
    if arguments is None:
        return _bad_request("Tool arguments are required")

    start = time.perf_counter()
    try:
        result = tool_service.call_tool(store, str(name), arguments)
    except tool_service.ToolError as exc:
        logger.warning("tool_call_rejected name=%s error=%s", name, exc)
        return _bad_request(str(exc))
    if env_flag("API_LOG_ALL_REQUESTS"):
        logger.info("tool_call name=%s elapsed_ms=%.2f", name, (time.perf_counter() - start) * 1000.0)
    return result
