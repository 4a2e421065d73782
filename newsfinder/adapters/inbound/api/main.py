"""FastAPI application for the news search service."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config import settings, setup_logging
from ....core.domain.exceptions import NewsSearchError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import articles, health, search

setup_logging(level=settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

# Full stack traces in error responses
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

app = FastAPI(
    title="NewsFinder API",
    description=(
        "Typo-tolerant news search. Queries Elasticsearch first and falls back "
        "to keyword search and local fuzzy matching."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(search.router)
app.include_router(articles.router)


@app.exception_handler(NewsSearchError)
async def news_search_error_handler(request: Request, exc: NewsSearchError) -> JSONResponse:
    """Structured JSON response for NewsSearchError."""
    status_code = get_http_status_code(exc)
    log_exception(
        exc,
        level=logging.WARNING if status_code < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict(include_trace=DEBUG_MODE))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Structured JSON response for anything unhandled."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


@app.on_event("startup")
async def startup_event():
    logger.info("NewsFinder API starting up (index %s)...", settings.news_index)
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("NewsFinder API shutting down...")


__all__ = ["app"]
