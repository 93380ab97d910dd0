"""Script-aware normalization of track titles and synonym terms.

Handles:
- Case differences (Dog / DOG / dog)
- Punctuation and symbols (replaced by spaces, then collapsed)
- Non-Latin scripts whose marks are not word characters (Hebrew niqqud etc.)
- Single-letter morphological prefixes (הציפור → ציפור, והדב → דב)

Script rules are data: each language gets a ``LanguageProfile`` naming its
extended code-point range and its prefix stripping rules. Calls without a
profile use ``ENGLISH``, which keeps Hebrew handling on.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Language profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LanguageProfile:
    """Per-language normalization rules.

    Attributes:
        name: Language name used to select mapping tables.
        extended_range: Inclusive (first, last) code points kept verbatim by
            ``normalize`` and used to decide which tokens get prefix variants.
        prefix_rules: Ordered (prefix, min_remaining) pairs. A token starting
            with ``prefix`` and keeping at least ``min_remaining`` characters
            after it yields the stripped variant.
    """

    name: str
    extended_range: tuple[int, int] | None = None
    prefix_rules: tuple[tuple[str, int], ...] = ()

    def is_extended(self, ch: str) -> bool:
        if self.extended_range is None:
            return False
        lo, hi = self.extended_range
        return lo <= ord(ch) <= hi

    def has_extended(self, text: str) -> bool:
        return any(self.is_extended(ch) for ch in text)


# Track titles mix Latin and Hebrew in every table, so the Hebrew block and
# its prefix rules are part of each built-in profile.
HEBREW_RANGE = (0x0590, 0x05FF)
HEBREW_PREFIX_RULES = (
    ("ה", 2),   # definite article: הציפור → ציפור
    ("ו", 2),   # conjunction: והדב → הדב
    ("וה", 3),  # conjunction + article: והדובי → דובי
)

ENGLISH = LanguageProfile(
    name="english",
    extended_range=HEBREW_RANGE,
    prefix_rules=HEBREW_PREFIX_RULES,
)

HEBREW = LanguageProfile(
    name="hebrew",
    extended_range=HEBREW_RANGE,
    prefix_rules=HEBREW_PREFIX_RULES,
)

PROFILES: dict[str, LanguageProfile] = {p.name: p for p in (ENGLISH, HEBREW)}


def get_profile(language: str | None) -> LanguageProfile:
    """Return the profile for ``language``, falling back to English."""
    profile = PROFILES.get((language or "").lower())
    if profile is None:
        logger.debug("No language profile for %r, using english", language)
        return ENGLISH
    return profile


# ---------------------------------------------------------------------------
# Core functions
# ---------------------------------------------------------------------------

_WS_RE = re.compile(r"\s+")


@lru_cache(maxsize=None)
def _symbol_re(extended_range: tuple[int, int] | None) -> re.Pattern[str]:
    """Pattern matching every character that is not kept by ``normalize``."""
    if extended_range is None:
        return re.compile(r"[^\w\s]")
    lo, hi = extended_range
    return re.compile(rf"[^\w\s{re.escape(chr(lo))}-{re.escape(chr(hi))}]")


def normalize(text: str, profile: LanguageProfile | None = None) -> str:
    """Normalize text: lowercase → symbols to spaces → collapse whitespace."""
    if not isinstance(text, str):
        return ""
    profile = profile or ENGLISH
    text = text.lower()
    text = _symbol_re(profile.extended_range).sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


def tokenize(text: str, profile: LanguageProfile | None = None) -> list[str]:
    """Split normalized text into tokens, dropping single characters."""
    return [t for t in normalize(text, profile).split(" ") if len(t) > 1]


def strip_prefixes(token: str, profile: LanguageProfile) -> list[str]:
    """Return prefix-stripped variants of ``token`` (not including itself).

    Every rule is checked independently, so one token can produce several
    variants (ו and וה both apply to והדובי).
    """
    variants = []
    for prefix, min_remaining in profile.prefix_rules:
        if token.startswith(prefix) and len(token) - len(prefix) >= min_remaining:
            variants.append(token[len(prefix):])
    return variants


def extract_search_terms(text: str, profile: LanguageProfile | None = None) -> list[str]:
    """Build the probe list for matching a title.

    Returns the full normalized title, each token, then prefix variants of
    tokens that contain extended-script characters. An empty title gives an
    empty list.
    """
    profile = profile or ENGLISH
    full = normalize(text, profile)
    if not full:
        return []
    words = tokenize(full, profile)
    variants: list[str] = []
    for word in words:
        if profile.has_extended(word):
            variants.extend(strip_prefixes(word, profile))
    return [full, *words, *variants]
