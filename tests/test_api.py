# tests/test_api.py

"""
API Endpoint Tests - Health, scoring trace and analytics endpoints
"""

import pytest
from fastapi import status

from survey_scoring.models.enumerations import MetricId

SURVEY_ID = "pulse-1"
ANALYTICS = f"/api/v1/analytics/{SURVEY_ID}"
TRACE = f"/api/v1/scoring/{SURVEY_ID}/trace"


# ROOT / HEALTH ENDPOINT TESTS


class TestHealthEndpoint:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health_reports_store_sizes(self, client, seeded_store):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == {"surveys": 1, "responses": 4, "versions": 2, "respondents": 8}


# SCORING TRACE ENDPOINT TESTS


class TestTraceEndpoint:
    """Tests for GET/POST /api/v1/scoring/{survey_id}/trace."""

    def test_stored_response_trace(self, client, seeded_store):
        response = client.get(TRACE, params={"response_id": "r1"})
        assert response.status_code == status.HTTP_200_OK

        body = response.json()
        assert "generated_at" in body
        trace = body["trace"]
        assert trace["meta"]["surveyId"] == SURVEY_ID
        assert trace["meta"]["responseId"] == "r1"
        assert trace["overall"]["score"] == 83
        assert trace["overall"]["bandId"] == "highly-effective"
        assert trace["overall"]["matchedRule"]["label"] == "High"
        assert {c["categoryId"]: c["normalizedScore"] for c in trace["categories"]} == {
            "engagement": 90,
            "leadership-effectiveness": 75,
        }
        assert trace["errors"] == []

    def test_adhoc_trace(self, client, seeded_store):
        response = client.post(TRACE, json={"answers": {"q1": 5, "q2": "5", "q3": "Always"}})
        assert response.status_code == status.HTTP_200_OK
        trace = response.json()["trace"]
        assert trace["meta"]["responseId"] is None
        assert trace["overall"]["score"] == 100

    def test_adhoc_trace_no_answers_has_no_overall(self, client, seeded_store):
        response = client.post(TRACE, json={"answers": {}})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["trace"]["overall"] is None

    def test_unknown_response(self, client, seeded_store):
        response = client.get(TRACE, params={"response_id": "nope"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error_code"] == "RESPONSE_NOT_FOUND"

    def test_unknown_survey(self, client, seeded_store):
        response = client.post("/api/v1/scoring/missing/trace", json={"answers": {}})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error_code"] == "SURVEY_NOT_FOUND"

    def test_missing_response_id(self, client, seeded_store):
        response = client.get(TRACE)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["message"] == "response_id query parameter is required"

    def test_missing_answers(self, client, seeded_store):
        response = client.post(TRACE, json={})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Answers are required"

    def test_malformed_json(self, client, seeded_store):
        response = client.post(
            TRACE, content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"


class TestDeleteResponseEndpoint:

    def test_delete(self, client, seeded_store):
        url = f"/api/v1/scoring/{SURVEY_ID}/responses/r4"
        assert client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert client.delete(url).status_code == status.HTTP_404_NOT_FOUND

        participation = client.get(f"{ANALYTICS}/participation_metrics").json()
        assert participation["data"]["totalResponses"] == 1

    def test_delete_wrong_survey(self, client, seeded_store):
        response = client.delete("/api/v1/scoring/other-survey/responses/r1")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert client.get(TRACE, params={"response_id": "r1"}).status_code == status.HTTP_200_OK


# ANALYTICS ENDPOINT TESTS


class TestAnalyticsEnvelope:
    """Tests for GET /api/v1/analytics/{survey_id}/{metric_id}."""

    def test_defaults_to_latest_version(self, client, seeded_store):
        response = client.get(f"{ANALYTICS}/participation_metrics")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["meta"]["surveyId"] == SURVEY_ID
        assert body["meta"]["version"] == "ver-2"
        assert body["meta"]["indexType"] is None
        assert "generatedAt" in body["meta"]
        assert body["data"] == {
            "totalResponses": 2,
            "responseRate": 25.0,
            "completionRate": 0.0,
            "avgCompletionTime": None,
        }

    def test_explicit_version(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/participation_metrics", params={"version": "ver-1"}).json()
        assert body["meta"]["version"] == "ver-1"
        assert body["data"]["totalResponses"] == 2
        assert body["data"]["completionRate"] == 100.0
        assert body["data"]["avgCompletionTime"] == 210

    @pytest.mark.parametrize("metric_id", [m.value for m in MetricId if m != MetricId.BEFORE_AFTER_INDEX_COMPARISON])
    def test_every_metric_answers(self, client, seeded_store, metric_id):
        response = client.get(f"{ANALYTICS}/{metric_id}")
        assert response.status_code == status.HTTP_200_OK
        assert set(response.json()) == {"meta", "data"}

    def test_index_type_in_meta(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/engagement_index_distribution").json()
        assert body["meta"]["indexType"] == "engagement"
        buckets = {b["range"]: b["count"] for b in body["data"]["overall"]["buckets"]}
        assert buckets["41-60"] == 1
        assert sum(buckets.values()) == 1

    def test_band_distribution(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/leadership_index_band_distribution", params={"version": "ver-1"}).json()
        bands = {b["bandId"]: b["count"] for b in body["data"]["bands"]}
        assert bands["needs-improvement"] == 1
        assert bands["highly-effective"] == 1
        assert body["data"]["totalResponses"] == 2

    def test_trend_granularity(self, client, seeded_store):
        body = client.get(
            f"{ANALYTICS}/wellbeing_index_trend",
            params={"version": "ver-1", "granularity": "daily"},
        ).json()
        assert [p["date"] for p in body["data"]["series"]] == ["2024-03-04", "2024-03-06"]

    def test_invalid_granularity(self, client, seeded_store):
        response = client.get(f"{ANALYTICS}/wellbeing_index_trend", params={"granularity": "hourly"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Granularity must be one of: daily, weekly, monthly"

    def test_trends_summary_ignores_version_filter(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/index_trends_summary").json()
        assert body["meta"]["version"] is None
        trends = body["data"]["trends"]
        assert [t["versionId"] for t in trends] == ["ver-1", "ver-2"]
        assert trends[0]["scores"]["engagement"] == 60.5
        assert body["data"]["hasMultipleVersions"] is True

    def test_before_after(self, client, seeded_store):
        response = client.get(
            f"{ANALYTICS}/before_after_index_comparison",
            params={"versionBefore": "ver-1", "versionAfter": "ver-2"},
        )
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["meta"]["versionBefore"] == "ver-1"
        assert body["meta"]["versionAfter"] == "ver-2"
        assert body["data"]["versionBefore"]["label"] == "v1"
        assert body["data"]["summary"]["overallTrend"] == "stable"
        assert body["data"]["comparison"][0]["change"] == -0.5

    def test_before_after_requires_both_versions(self, client, seeded_store):
        response = client.get(
            f"{ANALYTICS}/before_after_index_comparison", params={"versionBefore": "ver-1"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error_code"] == "INVALID_METRIC_QUERY"

    def test_unknown_metric(self, client, seeded_store):
        response = client.get(f"{ANALYTICS}/happiness_index")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        detail = response.json()["detail"]
        assert detail["error_code"] == "INVALID_METRIC_QUERY"
        assert "participation_metrics" in detail["details"]["validMetrics"]

    def test_unknown_survey(self, client, seeded_store):
        response = client.get("/api/v1/analytics/missing/participation_metrics")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error_code"] == "SURVEY_NOT_FOUND"


class TestVersionsAndConfidence:

    def test_versions_newest_first(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/versions").json()
        assert [v["id"] for v in body["versions"]] == ["ver-2", "ver-1"]
        assert [v["isLatest"] for v in body["versions"]] == [True, False]
        assert body["latestVersionId"] == "ver-2"

    def test_confidence(self, client, seeded_store):
        body = client.get(f"{ANALYTICS}/confidence").json()
        assert body["mode"] == "generic-scoring"
        assert [w["type"] for w in body["warnings"]] == ["low-responses"]
        assert body["responseCount"] == 4
        assert body["showTrends"] is True
        assert body["showDimensionLeaderboard"] is False

    def test_confidence_unknown_survey(self, client, seeded_store):
        response = client.get("/api/v1/analytics/missing/confidence")
        assert response.status_code == status.HTTP_404_NOT_FOUND
