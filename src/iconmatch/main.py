"""FastAPI application with lifespan-managed mapping store and resolver."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.router import api_router
from .config import settings
from .store import MappingStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Shared state accessible by API endpoints
app_state: dict = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    store = MappingStore()
    app_state["store"] = store

    coverage = store.coverage(settings.default_language)
    logger.info(
        "Icon mapping status (%s): %d keywords, %d mapped, %d unmapped",
        settings.default_language, coverage.total, coverage.mapped, len(coverage.unmapped),
    )
    if coverage.mapped == 0:
        logger.warning("No icon mappings available for %s", settings.default_language)

    # Semantic fallback (graceful degradation)
    if settings.semantic_enabled:
        from .ai.llm import ClaudeResolver

        app_state["resolver"] = ClaudeResolver()
        logger.info("Semantic fallback enabled (model=%s)", settings.semantic_model)
    else:
        logger.info("Anthropic API key not configured, semantic fallback disabled")

    logger.info("iconmatch started")

    yield

    # Shutdown
    app_state.clear()
    logger.info("iconmatch stopped")


app = FastAPI(
    title="iconmatch",
    description="Match track titles to icon keywords",
    version="0.1.0",
    lifespan=lifespan,
)
if settings.api_key:
    from .auth import ApiKeyMiddleware
    app.add_middleware(ApiKeyMiddleware)

app.include_router(api_router)
