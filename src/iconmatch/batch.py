"""Sequential batch matching of track titles with optional semantic fallback.

Titles are processed one at a time. The semantic resolver is a rate-limited
network call, so at most one request is in flight and every call is
followed by a fixed delay. Resolver failures count as "no match".
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .ai.llm import SemanticResolver
from .config import settings
from .matcher import NONE, MatchResult, Suggestion, accept_semantic, match_icon, suggest
from .stats import MatchStats
from .store import TableSnapshot

logger = logging.getLogger(__name__)


@dataclass
class TitleMatch:
    title: str
    result: MatchResult
    suggestions: list[Suggestion] = field(default_factory=list)


@dataclass
class BatchReport:
    matches: list[TitleMatch] = field(default_factory=list)
    stats: MatchStats = field(default_factory=MatchStats)

    def assignments(self) -> list[tuple[str, str]]:
        """(title, icon id) pairs ready for the playlist update."""
        return [
            (m.title, m.result.external_id)
            for m in self.matches
            if m.result.is_assignable
        ]

    def unmatched(self) -> list[TitleMatch]:
        return [m for m in self.matches if m.result.confidence == NONE]


async def _semantic_lookup(
    resolver: SemanticResolver, title: str, keywords: list[str],
) -> str | None:
    try:
        return await resolver(title, keywords)
    except Exception as e:
        logger.warning("Semantic resolver failed for %r: %s", title, e)
        return None


async def analyze_titles(
    titles: Iterable[str],
    snapshot: TableSnapshot,
    resolver: SemanticResolver | None = None,
    *,
    delay: float | None = None,
    suggestion_limit: int | None = None,
) -> BatchReport:
    """Match every title against ``snapshot`` and collect statistics.

    Args:
        titles: Track titles in playlist order.
        snapshot: Tables to match against; held for the whole batch.
        resolver: Semantic fallback for titles with no lexical match.
        delay: Seconds to wait after each resolver call (default from settings).
        suggestion_limit: Suggestions kept for unmatched titles.
    """
    delay = settings.semantic_delay if delay is None else delay
    limit = settings.suggestion_limit if suggestion_limit is None else suggestion_limit
    keywords = snapshot.available_keywords
    report = BatchReport()

    for title in titles:
        result = match_icon(title, snapshot)

        if result.confidence == NONE and resolver is not None and keywords and title:
            logger.info("Semantic matching for %r...", title)
            picked = await _semantic_lookup(resolver, title, keywords)
            result = accept_semantic(result, title, picked, keywords, snapshot.icon_mapping)
            if delay > 0:
                await asyncio.sleep(delay)

        suggestions: list[Suggestion] = []
        if result.confidence == NONE:
            suggestions = suggest(
                title, snapshot.synonyms, limit, snapshot.icon_mapping, snapshot.profile,
            )

        report.matches.append(TitleMatch(title=title, result=result, suggestions=suggestions))
        report.stats.record(result.confidence)
        _log_outcome(title, result, suggestions)

    for line in report.stats.summary_lines():
        logger.info(line)
    return report


def _log_outcome(title: str, result: MatchResult, suggestions: list[Suggestion]) -> None:
    if result.keyword and result.external_id:
        logger.info("[%s] %r → %s (%s)", result.confidence, title, result.keyword, result.external_id)
    elif result.keyword:
        logger.info("[%s] %r → %s (no icon mapping)", result.confidence, title, result.keyword)
    else:
        hints = ", ".join(f"{s.keyword} ({s.relevance:.1f}%)" for s in suggestions) or "none"
        logger.info(
            "[none] %r: search terms %s, suggestions: %s", title, result.search_terms, hints,
        )
