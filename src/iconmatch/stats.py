"""Batch confidence counts and mapping coverage."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field


@dataclass
class MatchStats:
    total: int = 0
    exact: int = 0
    partial: int = 0
    semantic: int = 0
    none: int = 0

    def record(self, confidence: str) -> None:
        if confidence not in ("exact", "partial", "semantic", "none"):
            raise ValueError(f"Unknown confidence tier: {confidence!r}")
        self.total += 1
        setattr(self, confidence, getattr(self, confidence) + 1)

    @property
    def assignable(self) -> int:
        return self.exact + self.partial + self.semantic

    def percentage(self, count: int) -> int:
        """``count`` as a whole percentage of ``total`` (half rounds up)."""
        if self.total == 0:
            return 0
        return math.floor(count * 100 / self.total + 0.5)

    def summary_lines(self) -> list[str]:
        lines = [
            f"Total titles: {self.total}",
            f"Exact matches: {self.exact} ({self.percentage(self.exact)}%)",
            f"Partial matches: {self.partial} ({self.percentage(self.partial)}%)",
        ]
        if self.semantic > 0:
            lines.append(f"Semantic matches: {self.semantic} ({self.percentage(self.semantic)}%)")
        lines.append(f"No matches: {self.none} ({self.percentage(self.none)}%)")
        lines.append(f"Assignable: {self.assignable} ({self.percentage(self.assignable)}%)")
        return lines


@dataclass
class CoverageStats:
    total: int = 0
    mapped: int = 0
    unmapped: list[str] = field(default_factory=list)


def coverage_stats(
    synonyms: Mapping[str, Sequence[str]], icon_mapping: Mapping[str, str],
) -> CoverageStats:
    """Count synonym-table keywords that have a non-empty icon id."""
    unmapped = [kw for kw in synonyms if not icon_mapping.get(kw)]
    return CoverageStats(
        total=len(synonyms),
        mapped=len(synonyms) - len(unmapped),
        unmapped=unmapped,
    )
