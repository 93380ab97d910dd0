"""Mapping table inspection and reload endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from ..schemas import CoverageResponse, KeywordListResponse
from .deps import check_language, get_snapshot, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/mappings", tags=["mappings"])


@router.get("/{language}/keywords", response_model=KeywordListResponse)
def list_keywords(language: str):
    snapshot = get_snapshot(language)
    keywords = snapshot.available_keywords
    return KeywordListResponse(language=snapshot.language, keywords=keywords, total=len(keywords))


@router.get("/{language}/coverage", response_model=CoverageResponse)
def coverage(language: str):
    snapshot = get_snapshot(language)
    stats = snapshot.coverage()
    return CoverageResponse(
        language=snapshot.language,
        total=stats.total,
        mapped=stats.mapped,
        unmapped=stats.unmapped,
    )


@router.post("/{language}/reload", response_model=CoverageResponse)
def reload_tables(language: str):
    language = check_language(language)
    snapshot = get_store().reload(language)
    stats = snapshot.coverage()
    logger.info("Reloaded %s tables via API (%d/%d mapped)", language, stats.mapped, stats.total)
    return CoverageResponse(
        language=language,
        total=stats.total,
        mapped=stats.mapped,
        unmapped=stats.unmapped,
    )
