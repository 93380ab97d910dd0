"""Health check endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from ..schemas import HealthResponse, ServiceStatus

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    from ..main import app_state

    services: list[ServiceStatus] = []
    overall = "ok"

    # Mapping tables
    store = app_state.get("store")
    languages: list[str] = []
    if store is None:
        services.append(ServiceStatus(name="mapping_store", status="unavailable", detail="not initialized"))
        overall = "degraded"
    else:
        languages = store.loaded_languages()
        for language in languages:
            stats = store.coverage(language)
            if stats.mapped == 0:
                services.append(ServiceStatus(
                    name=f"mappings_{language}",
                    status="degraded",
                    detail=f"{stats.total} keywords, no icon mappings",
                ))
                overall = "degraded"
            else:
                services.append(ServiceStatus(
                    name=f"mappings_{language}",
                    status="ok",
                    detail=f"{stats.mapped}/{stats.total} keywords mapped",
                ))

    # Semantic fallback
    if app_state.get("resolver") is not None:
        services.append(ServiceStatus(name="semantic_fallback", status="ok"))
    else:
        services.append(ServiceStatus(name="semantic_fallback", status="unavailable", detail="not configured"))

    return HealthResponse(status=overall, loaded_languages=languages, services=services)
