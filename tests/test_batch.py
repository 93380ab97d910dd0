"""Tests for sequential batch matching with the semantic fallback."""

from unittest.mock import AsyncMock, patch

import pytest

from iconmatch.batch import analyze_titles

TITLES = ["Goodnight Moon", "My Puppy Song", "Advanced Calculus", "Little Bird"]


@pytest.fixture()
def snapshot(store):
    return store.snapshot("english")


class TestLexicalBatch:
    @pytest.mark.asyncio
    async def test_stats_and_assignments(self, snapshot):
        report = await analyze_titles(TITLES, snapshot, delay=0)
        stats = report.stats
        assert (stats.total, stats.exact, stats.partial, stats.semantic, stats.none) == (4, 2, 1, 0, 1)
        assert stats.assignable == 3
        # "Little Bird" matches but "bird" has no icon
        assert report.assignments() == [
            ("Goodnight Moon", "yoto:#moon02"),
            ("My Puppy Song", "yoto:#dog01"),
        ]

    @pytest.mark.asyncio
    async def test_order_preserved(self, snapshot):
        report = await analyze_titles(TITLES, snapshot, delay=0)
        assert [m.title for m in report.matches] == TITLES

    @pytest.mark.asyncio
    async def test_unmatched(self, snapshot):
        report = await analyze_titles(TITLES, snapshot, delay=0)
        unmatched = report.unmatched()
        assert [m.title for m in unmatched] == ["Advanced Calculus"]
        assert unmatched[0].result.search_terms == ["advanced calculus", "advanced", "calculus"]
        assert unmatched[0].suggestions == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, snapshot):
        report = await analyze_titles([], snapshot)
        assert report.stats.total == 0
        assert report.assignments() == []


class TestSemanticFallback:
    @pytest.mark.asyncio
    async def test_only_called_for_unmatched(self, snapshot):
        resolver = AsyncMock(return_value="lion")
        report = await analyze_titles(["Goodnight Moon", "Savanna Nights"], snapshot, resolver, delay=0)
        resolver.assert_awaited_once_with("Savanna Nights", snapshot.available_keywords)
        result = report.matches[1].result
        assert result.confidence == "semantic"
        assert result.keyword == "lion"
        assert result.external_id == "yoto:#lion03"
        assert report.stats.semantic == 1
        assert report.stats.assignable == 2
        assert ("Savanna Nights", "yoto:#lion03") in report.assignments()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["tiger", "bird", "cake", None])
    async def test_rejected_answers_stay_none(self, snapshot, answer):
        resolver = AsyncMock(return_value=answer)
        report = await analyze_titles(["Savanna Nights"], snapshot, resolver, delay=0)
        assert report.matches[0].result.confidence == "none"
        assert report.matches[0].result.external_id is None
        assert report.stats.none == 1

    @pytest.mark.asyncio
    async def test_resolver_failure_is_no_match(self, snapshot):
        resolver = AsyncMock(side_effect=RuntimeError("rate limited"))
        report = await analyze_titles(["Savanna Nights", "Goodnight Moon"], snapshot, resolver, delay=0)
        assert [m.result.confidence for m in report.matches] == ["none", "exact"]

    @pytest.mark.asyncio
    async def test_fixed_delay_after_each_call(self, snapshot):
        resolver = AsyncMock(return_value=None)
        with patch("iconmatch.batch.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await analyze_titles(
                ["Savanna Nights", "Goodnight Moon", "Advanced Calculus"],
                snapshot, resolver, delay=0.5,
            )
        assert resolver.await_count == 2
        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.5)

    @pytest.mark.asyncio
    async def test_not_called_without_keywords(self, tmp_path):
        from iconmatch.store import MappingStore

        empty = MappingStore(tmp_path, tmp_path).snapshot("english")
        resolver = AsyncMock(return_value="lion")
        report = await analyze_titles(["Savanna Nights"], empty, resolver, delay=0)
        resolver.assert_not_awaited()
        assert report.stats.none == 1
