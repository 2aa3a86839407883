# tests/test_category_aggregator.py
"""
Category Aggregator Tests - weighted totals, skipping rules and collected errors
"""

import pytest

from survey_scoring.models.survey import Category, NumberQuestion, RatingQuestion
from survey_scoring.scoring.category_aggregator import CategoryAggregator


@pytest.fixture
def aggregator():
    return CategoryAggregator()


@pytest.fixture
def categories():
    return [Category(id="cat1", name="Category 1"), Category(id="cat2", name="Category 2")]


def rating(qid, category="cat1", scorable=True, weight=1.0):
    return RatingQuestion(
        id=qid, type="rating", rating_scale=5,
        scorable=scorable, scoring_category=category, score_weight=weight,
    )


class TestCategoryAggregator:

    def test_two_questions_sum_into_category(self, aggregator, categories):
        result = aggregator.aggregate(
            [rating("a"), rating("b")], categories, {"a": "3", "b": "4"}
        )
        totals = result.categories["cat1"]
        assert totals.raw_total == 7
        assert totals.max_total == 10
        assert totals.answered_count == 2
        assert result.errors == []

    def test_weight_scales_score_and_max(self, aggregator, categories):
        result = aggregator.aggregate([rating("a", weight=2)], categories, {"a": "4"})
        totals = result.categories["cat1"]
        assert totals.raw_total == 8
        assert totals.max_total == 10
        assert result.scored_questions[0].contribution == 8
        assert result.scored_questions[0].max_contribution == 10

    def test_unanswered_questions_are_skipped_not_zeroed(self, aggregator, categories):
        result = aggregator.aggregate(
            [rating("a"), rating("b"), rating("c")], categories, {"a": "5", "b": None, "c": ""}
        )
        totals = result.categories["cat1"]
        assert totals.raw_total == 5
        assert totals.max_total == 5
        assert totals.answered_count == 1
        assert [sq.question.id for sq in result.scored_questions] == ["a"]

    def test_every_configured_category_present(self, aggregator, categories):
        result = aggregator.aggregate([rating("a")], categories, {"a": "2"})
        assert list(result.categories) == ["cat1", "cat2"]
        assert result.categories["cat2"].answered_count == 0

    def test_category_without_scorable_flag_is_an_error(self, aggregator, categories):
        result = aggregator.aggregate([rating("a", scorable=False)], categories, {"a": "5"})
        assert result.errors == ["Question a has scoringCategory but scorable=false. Skipping."]
        assert result.categories["cat1"].answered_count == 0

    def test_scorable_without_category_is_an_error(self, aggregator, categories):
        result = aggregator.aggregate([rating("a", category=None)], categories, {"a": "5"})
        assert result.errors == ["Question a is scorable but missing scoringCategory. Skipping."]
        assert result.scored_questions == []

    def test_unknown_category_is_an_error(self, aggregator, categories):
        result = aggregator.aggregate([rating("a", category="ghost")], categories, {"a": "5"})
        assert result.errors == ["Question a has unknown category: ghost"]
        assert all(t.answered_count == 0 for t in result.categories.values())

    def test_unscorable_question_without_category_is_silent(self, aggregator, categories):
        q = NumberQuestion(id="n", type="number")
        result = aggregator.aggregate([q], categories, {"n": "5"})
        assert result.errors == []
        assert result.scored_questions == []
