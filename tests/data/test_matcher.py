"""Tests for the matching service over in-memory collaborators.

Expected totals with weights 0.3/0.3/0.2/0.2 and no rent budget:
  Indiranagar 76, Koramangala 61, Bandra 53, Alibag 27, Whitefield 21
"""

import asyncio

import pytest

from neighborfit.data.matcher import NeighborhoodMatcher
from neighborfit.engine.recommendation import NO_FAVORITES
from neighborfit.errors import NotFoundError, ValidationError


@pytest.fixture
def matcher(area_repo, account_repo) -> NeighborhoodMatcher:
    return NeighborhoodMatcher(area_repo, account_repo)


class TestMatchesForUser:
    def test_ranked_matches(self, matcher):
        ranked = asyncio.run(matcher.matches_for_user("asha", limit=3))
        assert [m.area.id for m in ranked.results] == ["indiranagar", "koramangala", "bandra"]
        assert [m.total_score for m in ranked.results] == [76, 61, 53]
        assert ranked.total_candidates == 5

    def test_city_filter(self, matcher):
        ranked = asyncio.run(matcher.matches_for_user("asha", limit=10, city="mumbai"))
        assert [m.area.id for m in ranked.results] == ["bandra", "alibag"]
        assert ranked.total_candidates == 2
        assert ranked.applied_filters.to_dict() == {"city": {"contains": "mumbai"}}

    def test_preferences_narrow_candidates(self, matcher, account_repo):
        asyncio.run(account_repo.update_preferences("asha", {"pet_friendly": True, "min_safety_score": 70}))
        ranked = asyncio.run(matcher.matches_for_user("asha", limit=10))
        assert [m.area.id for m in ranked.results] == ["indiranagar", "bandra"]

    def test_unknown_user(self, matcher):
        with pytest.raises(NotFoundError):
            asyncio.run(matcher.matches_for_user("nobody", limit=5))

    def test_invalid_limit(self, matcher):
        with pytest.raises(ValidationError):
            asyncio.run(matcher.matches_for_user("asha", limit=0))


class TestAnonymousMatches:
    def test_safest_first_with_default_threshold(self, matcher):
        found = asyncio.run(matcher.anonymous_matches(limit=10))
        assert [a.id for a in found] == ["indiranagar", "bandra", "koramangala", "alibag"]

    def test_filters_and_limit(self, matcher):
        found = asyncio.run(matcher.anonymous_matches(limit=2, pet_friendly=True))
        assert [a.id for a in found] == ["indiranagar", "bandra"]


class TestCompare:
    def test_compare_by_ids(self, matcher):
        result = asyncio.run(matcher.compare(["koramangala", "indiranagar"]))
        assert [m.area_id for m in result.per_area] == ["koramangala", "indiranagar"]
        assert result.best_safety.area_id == "indiranagar"

    def test_duplicate_ids_count_once(self, matcher):
        with pytest.raises(ValidationError):
            asyncio.run(matcher.compare(["bandra", "bandra"]))

    def test_missing_area(self, matcher):
        with pytest.raises(NotFoundError):
            asyncio.run(matcher.compare(["bandra", "atlantis"]))


class TestRecommendationsForUser:
    def test_no_favorites(self, matcher):
        result = asyncio.run(matcher.recommendations_for_user("asha", limit=5))
        assert result.results == []
        assert result.reason == NO_FAVORITES

    def test_similar_to_favorites(self, matcher, account_repo):
        asyncio.run(account_repo.add_favorite("asha", "koramangala"))
        result = asyncio.run(matcher.recommendations_for_user("asha", limit=5))
        assert [a.id for a in result.results] == ["bandra"]
        assert result.based_on.favorite_count == 1
        assert result.based_on.avg_safety == 70
        assert result.based_on.avg_lifestyle == 65

    def test_unknown_user(self, matcher):
        with pytest.raises(NotFoundError):
            asyncio.run(matcher.recommendations_for_user("nobody", limit=5))
