"""Language-scoped synonym and icon-id tables with a read-through cache.

Each language has two JSON documents:
- ``<synonyms_dir>/<language>.json``: keyword → list of synonyms
- ``<icon_mapping_dir>/icon_ids_<language>.json``: keyword → icon id

A missing or broken document loads as an empty table and is only logged;
matching then yields ``none`` for every title and coverage shows 0 mapped.

Reloading builds a new ``TableSnapshot`` and swaps the cached reference.
Snapshots are never mutated, so a batch holding an old one is unaffected.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from .config import settings
from .matcher import find_shared_synonyms
from .normalizer import LanguageProfile, get_profile
from .stats import CoverageStats, coverage_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSnapshot:
    """Read-only view of one language's tables at load time."""

    language: str
    profile: LanguageProfile
    synonyms: Mapping[str, tuple[str, ...]]
    icon_mapping: Mapping[str, str]

    @property
    def available_keywords(self) -> list[str]:
        return list(self.synonyms)

    def coverage(self) -> CoverageStats:
        return coverage_stats(self.synonyms, self.icon_mapping)


# ---------------------------------------------------------------------------
# JSON loading
# ---------------------------------------------------------------------------


def _read_json_object(path: Path, label: str) -> dict:
    """Return the JSON object stored at ``path``; ``{}`` on any failure."""
    if not path.exists():
        logger.warning("%s file %s not found, using empty table", label, path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s file %s: %s", label, path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning(
            "Unexpected %s format in %s: %s", label, path, type(data).__name__,
        )
        return {}
    return data


def load_synonym_table(path: str | Path) -> dict[str, tuple[str, ...]]:
    """Load keyword → synonyms, repairing loose shapes.

    A bare string becomes a one-element list; non-string items and
    non-list values are dropped.
    """
    data = _read_json_object(Path(path), "synonyms")
    table: dict[str, tuple[str, ...]] = {}
    for keyword, value in data.items():
        if isinstance(value, str):
            value = [value]
        elif not isinstance(value, list):
            logger.debug("Dropping synonyms for %r: %s", keyword, type(value).__name__)
            value = []
        table[str(keyword)] = tuple(s for s in value if isinstance(s, str) and s.strip())
    return table


def load_icon_mapping(path: str | Path) -> dict[str, str]:
    """Load keyword → icon id, keeping only string ids."""
    data = _read_json_object(Path(path), "icon mapping")
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class MappingStore:
    """Caller-owned cache of per-language table snapshots."""

    def __init__(
        self,
        synonyms_dir: str | Path | None = None,
        icon_mapping_dir: str | Path | None = None,
    ) -> None:
        self._synonyms_dir = Path(synonyms_dir or settings.synonyms_dir)
        self._icon_mapping_dir = Path(icon_mapping_dir or settings.icon_mapping_dir)
        self._lock = threading.Lock()
        self._snapshots: dict[str, TableSnapshot] = {}

    def synonyms_path(self, language: str) -> Path:
        return self._synonyms_dir / f"{language}.json"

    def icon_mapping_path(self, language: str) -> Path:
        return self._icon_mapping_dir / f"icon_ids_{language}.json"

    def snapshot(self, language: str) -> TableSnapshot:
        """Return the cached snapshot for ``language``, loading it on first use."""
        with self._lock:
            cached = self._snapshots.get(language)
        if cached is not None:
            return cached
        return self.reload(language)

    def synonyms(self, language: str) -> Mapping[str, tuple[str, ...]]:
        return self.snapshot(language).synonyms

    def icon_mapping(self, language: str) -> Mapping[str, str]:
        return self.snapshot(language).icon_mapping

    def available_keywords(self, language: str) -> list[str]:
        return self.snapshot(language).available_keywords

    def coverage(self, language: str) -> CoverageStats:
        return self.snapshot(language).coverage()

    def reload(self, language: str) -> TableSnapshot:
        """Re-read both tables and replace the cached snapshot."""
        synonyms = load_synonym_table(self.synonyms_path(language))
        icon_mapping = load_icon_mapping(self.icon_mapping_path(language))
        return self._install(language, synonyms, icon_mapping)

    def reload_icon_mapping(self, language: str) -> TableSnapshot:
        """Re-read only the icon table, keeping the cached synonyms."""
        current = self.snapshot(language)
        icon_mapping = load_icon_mapping(self.icon_mapping_path(language))
        return self._install(language, dict(current.synonyms), icon_mapping)

    def loaded_languages(self) -> list[str]:
        with self._lock:
            return list(self._snapshots)

    def _install(
        self,
        language: str,
        synonyms: dict[str, tuple[str, ...]],
        icon_mapping: dict[str, str],
    ) -> TableSnapshot:
        profile = get_profile(language)
        snapshot = TableSnapshot(
            language=language,
            profile=profile,
            synonyms=MappingProxyType(synonyms),
            icon_mapping=MappingProxyType(icon_mapping),
        )
        for term, owners in find_shared_synonyms(synonyms, profile).items():
            logger.warning(
                "Synonym %r is shared by %s; exact matches go to %r",
                term, ", ".join(owners), owners[0],
            )
        with self._lock:
            self._snapshots[language] = snapshot

        logger.info(
            "Loaded %s tables: %d keywords, %d icon mappings",
            language, len(synonyms), len(icon_mapping),
        )
        return snapshot
