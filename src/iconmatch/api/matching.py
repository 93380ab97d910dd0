"""Title matching, suggestions and batch analysis endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from ..batch import analyze_titles
from ..matcher import match_icon, suggest
from ..schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    Assignment,
    MatchRequest,
    MatchResponse,
    MatchStatsResponse,
    SuggestionResponse,
    SuggestListResponse,
    SuggestRequest,
    TitleMatchResponse,
)
from .deps import get_snapshot

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["matching"])


@router.post("/match", response_model=MatchResponse)
def match_title(body: MatchRequest):
    snapshot = get_snapshot(body.language)
    result = match_icon(body.title, snapshot)
    return MatchResponse.model_validate(result, from_attributes=True)


@router.post("/suggest", response_model=SuggestListResponse)
def suggest_keywords(body: SuggestRequest):
    snapshot = get_snapshot(body.language)
    suggestions = suggest(
        body.title, snapshot.synonyms, body.limit, snapshot.icon_mapping, snapshot.profile,
    )
    return SuggestListResponse(
        suggestions=[SuggestionResponse.model_validate(s, from_attributes=True) for s in suggestions],
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(body: AnalyzeRequest):
    from ..main import app_state

    snapshot = get_snapshot(body.language)
    resolver = app_state.get("resolver") if body.use_ai else None
    if body.use_ai and resolver is None:
        logger.info("Semantic fallback not configured; lexical matching only")

    report = await analyze_titles(body.titles, snapshot, resolver)

    stats = report.stats
    return AnalyzeResponse(
        matches=[TitleMatchResponse.model_validate(m, from_attributes=True) for m in report.matches],
        stats=MatchStatsResponse(
            total=stats.total,
            exact=stats.exact,
            partial=stats.partial,
            semantic=stats.semantic,
            none=stats.none,
            assignable=stats.assignable,
        ),
        assignments=[
            Assignment(title=title, external_id=external_id)
            for title, external_id in report.assignments()
        ],
        semantic_used=resolver is not None,
    )
