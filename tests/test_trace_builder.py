# tests/test_trace_builder.py
"""
Scoring Trace Builder Tests - category/overall scores, bands, errors, idempotence
"""

import pytest

from survey_scoring.models.survey import ScoreRange, Survey
from survey_scoring.scoring.trace_builder import (
    NO_CATEGORIES_ERROR,
    NO_RANGES_ERROR,
    SCORING_DISABLED_ERROR,
    CategoryScore,
    ScoringTraceBuilder,
    normalize_category_score,
    overall_score,
)


@pytest.fixture
def builder():
    return ScoringTraceBuilder()


def single_category_survey(**config_overrides):
    config = {
        "enabled": True,
        "categories": [{"id": "cat1", "name": "Category 1"}],
        "scoreRanges": [{"id": "all", "min": 0, "max": 100, "label": "All"}],
    }
    config.update(config_overrides)
    return Survey.model_validate({
        "id": "s1",
        "title": "Single",
        "questions": [
            {"id": "a", "type": "rating", "question": "A", "ratingScale": 5,
             "scorable": True, "scoringCategory": "cat1"},
            {"id": "b", "type": "rating", "question": "B", "ratingScale": 5,
             "scorable": True, "scoringCategory": "cat1"},
        ],
        "scoreConfig": config,
    })


# =============================================================================
# FORMULAS
# =============================================================================

class TestFormulas:

    def test_normalize_category_score(self):
        assert normalize_category_score(7, 10, 100) == 70
        assert normalize_category_score(1, 3, 100) == 33
        assert normalize_category_score(5, 0, 100) == 0

    def test_normalize_rounds_half_up(self):
        assert normalize_category_score(1, 8, 100) == 13  # 12.5

    def test_overall_ignores_unanswered_categories(self):
        categories = [
            CategoryScore("a", "A", 1, 9, 10, 90, 2),
            CategoryScore("b", "B", 1, 0, 0, 0, 0),
            CategoryScore("c", "C", 1, 3, 4, 75, 1),
        ]
        assert overall_score(categories) == 83  # mean(90, 75) = 82.5

    def test_overall_none_without_answers(self):
        assert overall_score([CategoryScore("a", "A", 1, 0, 0, 0, 0)]) is None
        assert overall_score([]) is None

    def test_overall_clamped(self):
        assert overall_score([CategoryScore("a", "A", 1, 30, 10, 300, 1)]) == 100
        assert overall_score([CategoryScore("a", "A", 1, -10, 10, -100, 1)]) == 0


# =============================================================================
# TRACE
# =============================================================================

class TestTraceScenarios:

    def test_single_rating_question_contribution(self, builder):
        """rating 5-point, answer "4" -> contribution 4, normalized 80."""
        trace = builder.build(single_category_survey(), {"a": "4"})
        [q] = trace.questions
        assert q.question_id == "a"
        assert q.max_points == 5
        assert q.weight == 1
        assert q.contribution_to_category == 4
        assert q.normalized_contribution == 80
        assert q.option_score_used is None

    def test_category_of_two_questions(self, builder):
        """raw 3 + 4 of max 10 -> normalized 70 -> Effective (61-80)."""
        trace = builder.build(single_category_survey(), {"a": "3", "b": "4"})
        [category] = trace.categories
        assert category.raw_score == 7
        assert category.max_possible_score == 10
        assert category.normalized_score == 70
        assert category.band_id == "effective"
        assert category.question_count == 2
        assert trace.overall.score == 70
        assert trace.overall.matched_rule.id == "all"

    def test_fixture_response_trace(self, builder, survey, responses):
        r1 = responses[0]
        trace = builder.build(survey, r1.answers, response_id=r1.id)

        assert trace.meta.survey_title == "Team Pulse"
        assert trace.meta.response_id == "r1"
        assert trace.meta.scoring_enabled is True
        assert [q.question_id for q in trace.questions] == ["q1", "q2", "q3"]

        q3 = trace.questions[2]
        assert q3.option_score_used == 3
        assert q3.max_points == 4
        assert q3.normalized_contribution == 75
        assert q3.category_name == "Leadership"

        by_id = {c.category_id: c for c in trace.categories}
        assert by_id["engagement"].normalized_score == 90
        assert by_id["engagement"].band_id == "highly-effective"
        assert by_id["leadership-effectiveness"].normalized_score == 75

        assert trace.overall.score == 83
        assert trace.overall.band_id == "highly-effective"
        assert trace.overall.matched_rule.label == "High"
        assert trace.errors == []

    def test_configured_category_without_answers_listed(self, builder, survey, responses):
        trace = builder.build(survey, responses[2].answers)
        by_id = {c.category_id: c for c in trace.categories}
        assert by_id["leadership-effectiveness"].question_count == 0
        assert by_id["leadership-effectiveness"].normalized_score == 0
        assert trace.overall.score == 60

    def test_max_configured_score_above_hundred(self, builder):
        survey = single_category_survey(
            scoreRanges=[{"id": "wide", "category": "cat1", "min": 0, "max": 200, "label": "Wide"}]
        )
        trace = builder.build(survey, {"a": "3", "b": "4"})
        assert trace.categories[0].normalized_score == 140
        # Overall is clamped back onto the 0-100 index scale
        assert trace.overall.score == 100


class TestTraceDegradation:

    def test_scoring_disabled_returns_empty_trace(self, builder, disabled_survey, responses):
        trace = builder.build(disabled_survey, responses[0].answers, response_id="r1")
        assert trace.meta.scoring_enabled is False
        assert trace.config is None
        assert trace.questions == []
        assert trace.categories == []
        assert trace.overall is None
        assert trace.errors == [SCORING_DISABLED_ERROR]

    def test_missing_categories_and_ranges_reported(self, builder):
        survey = single_category_survey(categories=[], scoreRanges=[])
        trace = builder.build(survey, {"a": "4"})
        assert NO_CATEGORIES_ERROR in trace.errors
        assert NO_RANGES_ERROR in trace.errors
        assert "Question a has unknown category: cat1" in trace.errors
        assert trace.overall is None

    def test_no_scorable_questions(self, builder, unscored_survey):
        trace = builder.build(unscored_survey, {"t1": "Ann", "r1": "5"})
        assert trace.questions == []
        assert trace.overall is None
        assert trace.categories[0].normalized_score == 0

    def test_no_matching_rule(self, builder):
        survey = single_category_survey(
            scoreRanges=[{"id": "top", "min": 90, "max": 100, "label": "Top"}]
        )
        trace = builder.build(survey, {"a": "1", "b": "1"})
        assert trace.overall.score == 20
        assert trace.overall.matched_rule is None

    def test_oversized_answer_scores_as_unparseable(self, builder):
        """A 401-digit answer contributes 0 instead of overflowing the weighted sum."""
        trace = builder.build(single_category_survey(), {"a": "1" + "0" * 400, "b": "5"})
        [category] = trace.categories
        assert category.raw_score == 5
        assert category.normalized_score == 50
        assert trace.questions[0].normalized_contribution == 0
        assert trace.overall.score == 50

    def test_largest_exact_answer_is_clamped_overall(self, builder):
        trace = builder.build(single_category_survey(), {"a": "9007199254740991"})
        assert trace.categories[0].normalized_score > 100
        assert trace.overall.score == 100

    def test_idempotent(self, builder, survey, responses):
        first = builder.build(survey, responses[0].answers, response_id="r1")
        second = builder.build(survey, responses[0].answers, response_id="r1")
        assert first.model_dump() == second.model_dump()

    def test_serializes_camel_case(self, builder, survey, responses):
        data = builder.build(survey, responses[0].answers).model_dump(by_alias=True)
        assert "scoringEnabled" in data["meta"]
        assert "normalizedContribution" in data["questions"][0]
        assert "matchedRule" in data["overall"]
        assert "scoreRanges" in data["config"]
