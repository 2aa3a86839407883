# tests/conftest.py

"""
Pytest Fixtures - Shared survey, response and version data for engine and API tests

FIXTURE DATA REFERENCE (survey "pulse-1", categories engagement ×2 weight,
leadership-effectiveness ×1 weight):

    response  q1  q2  q3         engagement  leadership  overall  manager  version
    r1        4   5   Often      90          75          83       m1       ver-1
    r2        2   3   Never      50          25          38       m1       ver-1
    r3        3   -   -          60          -           60       m2       ver-2
    r4        (text answer only) -           -           None     -        ver-2
"""

import pytest
from fastapi.testclient import TestClient

from survey_scoring.core.dependencies import (
    get_respondent_repository,
    get_response_repository,
    get_survey_repository,
    get_version_repository,
)
from survey_scoring.main import app
from survey_scoring.models.response import Respondent, ScoreConfigVersion, SurveyResponse
from survey_scoring.models.survey import Survey


SURVEY_ID = "pulse-1"


# =============================================================================
# SURVEY FIXTURES
# =============================================================================

def build_survey_payload():
    """Survey JSON as the editor authors it (camelCase keys)."""
    return {
        "id": SURVEY_ID,
        "title": "Team Pulse",
        "questions": [
            {
                "id": "q1", "type": "rating", "question": "I feel motivated at work.",
                "ratingScale": 5, "scorable": True, "scoringCategory": "engagement",
            },
            {
                "id": "q2", "type": "rating", "question": "I would recommend this team.",
                "ratingScale": 5, "scorable": True, "scoringCategory": "engagement",
            },
            {
                "id": "q3", "type": "multiple_choice", "question": "My manager gives clear feedback.",
                "options": ["Never", "Sometimes", "Often", "Always"],
                "optionScores": {"Never": 1, "Sometimes": 2, "Often": 3, "Always": 4},
                "scorable": True, "scoringCategory": "leadership-effectiveness",
            },
            {"id": "q4", "type": "textarea", "question": "Anything else?"},
            {"id": "s1", "type": "section", "question": "About you"},
            {"id": "q5", "type": "yes_no", "question": "Have you been here over a year?"},
        ],
        "scoreConfig": {
            "enabled": True,
            "categories": [
                {"id": "engagement", "name": "Engagement", "weight": 2},
                {"id": "leadership-effectiveness", "name": "Leadership", "weight": 1},
            ],
            "scoreRanges": [
                {"id": "low", "min": 0, "max": 49, "label": "Low"},
                {"id": "high", "min": 50, "max": 100, "label": "High"},
            ],
        },
    }


@pytest.fixture
def survey_payload():
    return build_survey_payload()


@pytest.fixture
def survey(survey_payload):
    return Survey.model_validate(survey_payload)


@pytest.fixture
def disabled_survey():
    payload = build_survey_payload()
    payload["scoreConfig"]["enabled"] = False
    return Survey.model_validate(payload)


@pytest.fixture
def unscored_survey():
    """Scoring enabled, but no question is scorable."""
    return Survey.model_validate({
        "id": "plain-1",
        "title": "Plain",
        "questions": [
            {"id": "t1", "type": "text", "question": "Name?"},
            {"id": "r1", "type": "rating", "question": "Rate us", "ratingScale": 5},
        ],
        "scoreConfig": {
            "enabled": True,
            "categories": [{"id": "engagement", "name": "Engagement"}],
            "scoreRanges": [{"id": "all", "min": 0, "max": 100, "label": "All"}],
        },
    })


# =============================================================================
# RESPONSE / VERSION FIXTURES
# =============================================================================

def build_response_payloads():
    return [
        {
            "id": "r1", "surveyId": SURVEY_ID,
            "answers": {"q1": "4", "q2": 5, "q3": "Often"},
            "metadata": {"managerId": "m1", "managerName": "Alice"},
            "completionPercentage": 100,
            "startedAt": "2024-03-04T09:00:00Z",
            "completedAt": "2024-03-04T09:05:00Z",
            "scoreConfigVersionId": "ver-1",
        },
        {
            "id": "r2", "surveyId": SURVEY_ID,
            "answers": {"q1": "2", "q2": "3", "q3": "Never"},
            "metadata": {"managerId": "m1", "managerName": "Alice"},
            "completionPercentage": 90,
            "totalDurationMs": 120000,
            "completedAt": "2024-03-06T15:30:00Z",
            "scoreConfigVersionId": "ver-1",
        },
        {
            "id": "r3", "surveyId": SURVEY_ID,
            "answers": {"q1": "3", "q2": ""},
            "metadata": {"manager_id": "m2", "managerName": "Bob"},
            "completionPercentage": 50,
            "completedAt": "2024-03-12T08:00:00Z",
            "scoreConfigVersionId": "ver-2",
        },
        {
            "id": "r4", "surveyId": SURVEY_ID,
            "answers": {"q4": "Great team"},
            "scoreConfigVersionId": "ver-2",
        },
    ]


@pytest.fixture
def response_payloads():
    return build_response_payloads()


@pytest.fixture
def responses(response_payloads):
    return [SurveyResponse.model_validate(p) for p in response_payloads]


@pytest.fixture
def versions():
    return [
        ScoreConfigVersion(id="ver-2", survey_id=SURVEY_ID, version_number=2,
                           created_at="2024-03-10T00:00:00Z"),
        ScoreConfigVersion(id="ver-1", survey_id=SURVEY_ID, version_number=1,
                           created_at="2024-03-01T00:00:00Z"),
    ]


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def seeded_store():
    """Populate the cached in-memory repositories with the fixture data."""
    surveys = get_survey_repository()
    responses_repo = get_response_repository()
    versions_repo = get_version_repository()
    respondents = get_respondent_repository()
    for repo in (surveys, responses_repo, versions_repo, respondents):
        repo.clear()

    surveys.add(Survey.model_validate(build_survey_payload()))
    responses_repo.add_many(SurveyResponse.model_validate(p) for p in build_response_payloads())
    versions_repo.add_many([
        ScoreConfigVersion(id="ver-1", survey_id=SURVEY_ID, version_number=1,
                           created_at="2024-03-01T00:00:00Z"),
        ScoreConfigVersion(id="ver-2", survey_id=SURVEY_ID, version_number=2,
                           created_at="2024-03-10T00:00:00Z"),
    ])
    respondents.add_many(
        Respondent(id=f"inv-{i}", survey_id=SURVEY_ID, email=f"p{i}@example.com")
        for i in range(8)
    )
    yield
    for repo in (surveys, responses_repo, versions_repo, respondents):
        repo.clear()


@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
