import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from helpers import FakeCompletionService

from dashboard.app import app
from dashboard.api.matching import get_completion_service
from jobmatch.ai.completion_client import CompletionResponse
from jobmatch.exceptions import CompletionServiceError


PROFILE = {
    "skills": ["Python", "AWS", "PostgreSQL"],
    "experience": [{"title": "Backend Engineer", "company": "Acme", "description": "Python on AWS"}],
    "education": [{"degree": "BSc", "field": "Computer Science", "institution": "TU Berlin"}],
    "location": "Berlin, Germany",
    "yearsOfExperience": 5,
}

JOB = {
    "id": "job-1",
    "title": "Senior Backend Engineer",
    "company": "Globex",
    "location": "Remote",
    "description": "Build APIs for our platform.",
    "requirements": "5+ years of Python\nExperience with AWS",
    "salaryRange": "$90k - $140k",
}


class MatchingApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_service(self, service):
        app.dependency_overrides[get_completion_service] = lambda: service
        return service

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_ats_score(self):
        response = self.client.post("/api/match/ats", json={"profile": PROFILE, "job": JOB})
        self.assertEqual(response.status_code, 200)

        body = response.json()
        self.assertGreaterEqual(body["atsScore"], 0)
        self.assertLessEqual(body["atsScore"], 100)
        self.assertIn("python", body["keyStrengths"])
        self.assertIn("gapPenalty", body["breakdown"])

    def test_ats_score_with_supplied_keywords(self):
        response = self.client.post(
            "/api/match/ats",
            json={"profile": PROFILE, "job": JOB, "must_have_keywords": ["PostgreSQL", "Docker"]},
        )
        body = response.json()

        self.assertEqual(body["keyStrengths"], ["PostgreSQL"])
        self.assertIn('Missing: "Docker"', body["gaps"])

    def test_job_without_id_is_422(self):
        job = dict(JOB)
        del job["id"]
        response = self.client.post("/api/match/ats", json={"profile": PROFILE, "job": job})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"], "Job listing is missing an id")

    def test_quick_match(self):
        response = self.client.post("/api/match/quick", json={"profile": PROFILE, "job": JOB})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"jobId": "job-1", "matchScore": 77})

    def test_keywords(self):
        response = self.client.post("/api/match/keywords", json={"job": JOB})
        phrases = [k["phrase"] for k in response.json()["keywords"]]

        self.assertEqual(phrases[:3], ["senior", "backend", "engineer"])
        self.assertLessEqual(len(phrases), 30)

    def test_keywords_honour_config_env(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "matching.yaml"
            path.write_text("matching:\n  max_keywords: 2\n")

            with patch.dict(os.environ, {"JOBMATCH_CONFIG": str(path)}):
                response = self.client.post("/api/match/keywords", json={"job": JOB})

        phrases = [k["phrase"] for k in response.json()["keywords"]]
        self.assertEqual(phrases, ["senior", "backend"])

    def test_completion_client_closed_after_request(self):
        with patch("dashboard.api.matching.CompletionClient") as client_cls:
            client = client_cls.return_value
            client.complete.return_value = CompletionResponse(content='{"overallProbability": 61}')

            response = self.client.post("/api/match/success", json={"profile": PROFILE, "job": JOB})

        self.assertEqual(response.json()["overallProbability"], 61)
        client.close.assert_called_once()

    def test_recommendations(self):
        service = self._use_service(FakeCompletionService([[
            {"jobId": "job-1", "matchScore": 88, "reasons": ["Python depth"]},
        ]]))
        response = self.client.post(
            "/api/match/recommendations",
            json={"profile": PROFILE, "jobs": [JOB], "limit": 5, "user_id": "u-1"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["count"], 1)
        rec = body["recommendations"][0]
        self.assertEqual(rec["matchScore"], 88)
        self.assertEqual(rec["whyMatch"], "Your profile aligns with this role: Python depth.")
        self.assertEqual(rec["atsScore"], rec["ats"]["atsScore"])
        self.assertEqual(service.requests[0].user_id, "u-1")

    def test_recommendations_service_down_is_502(self):
        self._use_service(FakeCompletionService(
            error=CompletionServiceError("unreachable", error_type="network", retryable=True)
        ))
        response = self.client.post(
            "/api/match/recommendations", json={"profile": PROFILE, "jobs": [JOB]}
        )

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"]["error_type"], "network")

    def test_salary(self):
        self._use_service(FakeCompletionService(["not json"]))
        response = self.client.post("/api/match/salary", json={"profile": PROFILE, "job": JOB})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual((body["predictedMin"], body["predictedMax"]), (90, 140))
        self.assertEqual(body["confidence"], 50)

    def test_success(self):
        self._use_service(FakeCompletionService([{"overallProbability": 74}]))
        response = self.client.post("/api/match/success", json={"profile": PROFILE, "job": JOB})

        body = response.json()
        self.assertEqual(body["overallProbability"], 74)
        self.assertEqual(body["level"], "High")

    def test_alerts(self):
        self._use_service(FakeCompletionService([[
            {"criteria": {"keywords": ["Python"]}, "frequency": "realtime", "description": "Python jobs"},
        ]]))
        response = self.client.post("/api/match/alerts", json={"profile": PROFILE})

        body = response.json()
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["alerts"][0]["frequency"], "realtime")


if __name__ == "__main__":
    unittest.main()
