from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_mcp import config
from portfolio_mcp.adapters.dataset_store import DataLoadError, PortfolioStore, default_store
from portfolio_mcp.routers import health, tools

config.configure_logging()
log = logging.getLogger(__name__)


def create_app(store: PortfolioStore | None = None) -> FastAPI:
    """Build the HTTP boundary. The store is shared by reference with every request."""
    application = FastAPI(title="Portfolio MCP API", version=config.SERVER_VERSION)
    application.state.store = store if store is not None else default_store()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @application.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @application.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        return JSONResponse(status_code=400, content={"error": str(first.get("msg", "Invalid request"))})

    @application.exception_handler(DataLoadError)
    async def data_load_error(request: Request, exc: DataLoadError) -> JSONResponse:
        log.error("dataset_load_failed path=%s error=%s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    application.include_router(health.router, prefix="/api", tags=["health"])
    application.include_router(tools.router, prefix="/api", tags=["tools"])
    return application


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "portfolio_mcp.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=logging.getLevelName(config.log_level()).lower(),
    )
