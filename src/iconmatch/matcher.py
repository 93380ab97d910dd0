"""Keyword matching: determines which icon keyword a track title refers to.

Tiers:
  exact     → the keyword itself appears among the title's search terms
  partial   → a synonym matched exactly, or the best substring overlap won
  semantic  → no lexical match; an external resolver picked the keyword
  none      → nothing matched

Lexical matching walks the synonym table once:
  Exact term equality      → return that keyword immediately (first wins)
  Containment either way   → score = length of the longer string
  Best score               → first keyword reaching the maximum is kept

Suggestions use a separate overlap ratio (shorter / longer * 100) and are
only for display; they never decide the match.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from .normalizer import LanguageProfile, extract_search_terms, normalize

if TYPE_CHECKING:
    from .store import TableSnapshot

logger = logging.getLogger(__name__)

Confidence = Literal["exact", "partial", "semantic", "none"]

EXACT: Confidence = "exact"
PARTIAL: Confidence = "partial"
SEMANTIC: Confidence = "semantic"
NONE: Confidence = "none"

ASSIGNABLE_TIERS = frozenset({EXACT, PARTIAL, SEMANTIC})

SynonymTable = Mapping[str, Sequence[str]]
IconMapping = Mapping[str, str]


@dataclass(frozen=True)
class MatchResult:
    keyword: str | None
    external_id: str | None
    confidence: Confidence
    search_terms: list[str] = field(default_factory=list)

    @property
    def is_assignable(self) -> bool:
        return self.confidence in ASSIGNABLE_TIERS and self.external_id is not None


@dataclass(frozen=True)
class Suggestion:
    keyword: str
    external_id: str | None
    relevance: float  # (0, 100]


# ---------------------------------------------------------------------------
# Lexical matching
# ---------------------------------------------------------------------------


def _candidate_terms(
    keyword: str, synonym_list: Sequence[str], profile: LanguageProfile | None,
) -> list[str]:
    """Normalized keyword + synonyms, skipping terms that normalize to ''."""
    terms = []
    for term in (keyword, *synonym_list):
        norm = normalize(term, profile)
        if norm:
            terms.append(norm)
    return terms


def find_best_keyword(
    search_terms: Sequence[str],
    synonyms: SynonymTable,
    profile: LanguageProfile | None = None,
) -> str | None:
    """Return the keyword the search terms point to, or None.

    An exact term hit ends the scan. Otherwise the keyword with the longest
    containment overlap wins; ties keep the first keyword encountered.
    """
    best_match: str | None = None
    best_score = 0

    for keyword, synonym_list in synonyms.items():
        candidates = _candidate_terms(keyword, synonym_list, profile)
        for search_term in search_terms:
            if not search_term:
                continue
            for term in candidates:
                if term == search_term:
                    return keyword
                if term in search_term or search_term in term:
                    score = max(len(term), len(search_term))
                    if score > best_score:
                        best_score = score
                        best_match = keyword

    return best_match


def match(
    title: str | None,
    synonyms: SynonymTable,
    profile: LanguageProfile | None = None,
) -> MatchResult:
    """Match ``title`` against the synonym table (no external id resolution)."""
    search_terms = extract_search_terms(title, profile) if title else []
    keyword = find_best_keyword(search_terms, synonyms, profile)

    if keyword is None:
        return MatchResult(keyword=None, external_id=None, confidence=NONE, search_terms=search_terms)

    confidence = EXACT if normalize(keyword, profile) in search_terms else PARTIAL
    return MatchResult(
        keyword=keyword, external_id=None, confidence=confidence, search_terms=search_terms,
    )


def resolve_external_id(result: MatchResult, icon_mapping: IconMapping) -> MatchResult:
    """Attach the icon id for ``result.keyword``; unmapped keywords get None."""
    if result.keyword is None:
        return replace(result, external_id=None)
    return replace(result, external_id=icon_mapping.get(result.keyword) or None)


def match_icon(title: str | None, snapshot: TableSnapshot) -> MatchResult:
    """Match ``title`` and resolve its icon id using a ``TableSnapshot``."""
    result = match(title, snapshot.synonyms, snapshot.profile)
    return resolve_external_id(result, snapshot.icon_mapping)


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


def suggest(
    title: str | None,
    synonyms: SynonymTable,
    limit: int = 3,
    icon_mapping: IconMapping | None = None,
    profile: LanguageProfile | None = None,
) -> list[Suggestion]:
    """Rank keywords by their best overlap ratio with the title.

    Relevance is ``100 * shorter / longer`` over every contained pair.
    Keywords without overlap are left out; ties keep table order.
    """
    if limit <= 0:
        return []
    icon_mapping = icon_mapping or {}
    search_terms = [t for t in (extract_search_terms(title, profile) if title else []) if t]

    suggestions: list[Suggestion] = []
    for keyword, synonym_list in synonyms.items():
        max_relevance = 0.0
        for search_term in search_terms:
            for term in _candidate_terms(keyword, synonym_list, profile):
                if term in search_term or search_term in term:
                    shorter, longer = sorted((len(term), len(search_term)))
                    max_relevance = max(max_relevance, shorter / longer * 100)
        if max_relevance > 0:
            suggestions.append(Suggestion(
                keyword=keyword,
                external_id=icon_mapping.get(keyword) or None,
                relevance=max_relevance,
            ))

    suggestions.sort(key=lambda s: s.relevance, reverse=True)
    return suggestions[:limit]


# ---------------------------------------------------------------------------
# Semantic tier
# ---------------------------------------------------------------------------


def accept_semantic(
    result: MatchResult,
    title: str,
    keyword: str | None,
    available_keywords: Sequence[str],
    icon_mapping: IconMapping,
) -> MatchResult:
    """Promote a ``none`` result to ``semantic`` if the resolver's pick is usable.

    The keyword must be a literal member of ``available_keywords`` and have
    a non-empty icon id; anything else leaves ``result`` untouched.
    """
    if result.confidence != NONE or not keyword:
        return result
    if keyword not in available_keywords:
        logger.info("Semantic pick %r for %r is not a known keyword", keyword, title)
        return result
    external_id = icon_mapping.get(keyword)
    if not external_id:
        logger.info("Semantic pick %r for %r has no icon mapping", keyword, title)
        return result
    return MatchResult(
        keyword=keyword, external_id=external_id, confidence=SEMANTIC, search_terms=[title],
    )


# ---------------------------------------------------------------------------
# Table checks
# ---------------------------------------------------------------------------


def find_shared_synonyms(
    synonyms: SynonymTable, profile: LanguageProfile | None = None,
) -> dict[str, list[str]]:
    """Map each normalized term claimed by 2+ keywords to those keywords.

    Exact matching returns the first owner in table order, so every entry
    here is a term whose later owners can never win an exact match.
    """
    owners: dict[str, list[str]] = {}
    for keyword, synonym_list in synonyms.items():
        for term in _candidate_terms(keyword, synonym_list, profile):
            bucket = owners.setdefault(term, [])
            if keyword not in bucket:
                bucket.append(keyword)
    return {term: kws for term, kws in owners.items() if len(kws) > 1}
