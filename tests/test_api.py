import os
import unittest
from unittest.mock import patch

# Keep API tests deterministic and offline.
os.environ.setdefault("RECORDS_DB_PATH", ":memory:")
os.environ.setdefault("TOOLS_LLM_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from fastapi.testclient import TestClient

from careerlens.main import app
from careerlens.storage import records as store

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}


class ApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        os.environ["TOOLS_LLM_ENABLED"] = "0"
        cls.client = TestClient(app)

    def setUp(self):
        store.clear_records()

    def _seed_pair(self) -> tuple[str, str]:
        resume = store.create_record(
            kind="resume",
            user_id="user-1",
            payload={"atsScore": 80, "skills": ["docker", "react"], "fileName": "cv.pdf"},
        )
        job = store.create_record(
            kind="job",
            user_id="user-1",
            payload={
                "jobTitle": "Platform Engineer",
                "matchScore": 70,
                "missingSkills": ["docker", "aws"],
                "recommendedKeywords": ["react", "docker"],
            },
        )
        return resume["id"], job["id"]


class HealthApiTests(ApiTestCase):
    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertFalse(body["llmEnabled"])


class MatchApiTests(ApiTestCase):
    def test_match_falls_back_when_llm_disabled(self):
        resume_id, job_id = self._seed_pair()
        response = self.client.post(
            "/v1/match/analyze", json={"resumeId": resume_id, "jobId": job_id}, headers=USER
        )
        self.assertEqual(response.status_code, 200)
        match = response.json()["match"]
        self.assertEqual(match["overallScore"], 63)
        self.assertEqual(match["hiringProbability"], 53)
        self.assertEqual(match["verdict"], "Competitive")
        self.assertEqual(match["matchingSkills"], ["docker", "react"])
        self.assertEqual(match["missingSkills"], ["docker", "aws"])
        self.assertEqual(match["source"], "fallback")
        self.assertEqual(match["jobTitle"], "Platform Engineer")
        self.assertEqual(match["resumeFileName"], "cv.pdf")
        self.assertEqual(match["resumeId"], resume_id)
        self.assertTrue(match["id"])

        history = self.client.get("/v1/match/history", headers=USER).json()
        self.assertEqual(history["count"], 1)
        self.assertEqual(history["history"][0]["id"], match["id"])

    def test_match_falls_back_on_unparsable_ai_answer(self):
        resume_id, job_id = self._seed_pair()
        with patch(
            "careerlens.services.match_service.json_completion",
            return_value=(None, "The candidate looks fine overall."),
        ):
            response = self.client.post(
                "/v1/match/analyze", json={"resumeId": resume_id, "jobId": job_id}, headers=USER
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["match"]["source"], "fallback")

    def test_match_uses_sanitized_ai_payload(self):
        resume_id, job_id = self._seed_pair()
        payload = {
            "overallScore": 88,
            "hiringProbability": 140,
            "roleCategory": "backend",
            "verdict": "Strong Fit",
            "competencies": [{"name": "Docker", "resumeLevel": 6, "jdLevel": 8}],
        }
        with patch(
            "careerlens.services.match_service.json_completion",
            return_value=(payload, "{...}"),
        ):
            response = self.client.post(
                "/v1/match/analyze", json={"resumeId": resume_id, "jobId": job_id}, headers=USER
            )
        self.assertEqual(response.status_code, 200)
        match = response.json()["match"]
        self.assertEqual(match["source"], "ai")
        self.assertEqual(match["overallScore"], 88)
        self.assertEqual(match["hiringProbability"], 100)
        self.assertEqual(match["competencies"], [{"name": "Docker", "resumeLevel": 6, "jdLevel": 8, "gap": 2}])

    def test_match_requires_owned_records(self):
        resume_id, job_id = self._seed_pair()
        response = self.client.post(
            "/v1/match/analyze", json={"resumeId": resume_id, "jobId": job_id}, headers=OTHER_USER
        )
        self.assertEqual(response.status_code, 404)

        response = self.client.post("/v1/match/analyze", json={"resumeId": resume_id}, headers=USER)
        self.assertEqual(response.status_code, 400)

    def test_stateless_fallback_endpoint(self):
        response = self.client.post(
            "/v1/match/fallback",
            json={"resume": {"skills": []}, "job": {"missingSkills": []}},
        )
        self.assertEqual(response.status_code, 200)
        match = response.json()["match"]
        self.assertEqual(match["overallScore"], 35)
        self.assertEqual(match["verdict"], "Weak Fit")
        self.assertEqual(match["competencies"], [])

    def test_delete_history_record(self):
        resume_id, job_id = self._seed_pair()
        match_id = self.client.post(
            "/v1/match/analyze", json={"resumeId": resume_id, "jobId": job_id}, headers=USER
        ).json()["match"]["id"]

        self.assertEqual(self.client.delete(f"/v1/match/history/{match_id}", headers=OTHER_USER).status_code, 404)
        self.assertEqual(self.client.delete(f"/v1/match/history/{match_id}", headers=USER).status_code, 200)
        self.assertEqual(self.client.get("/v1/match/history", headers=USER).json()["count"], 0)
        self.assertEqual(self.client.delete("/v1/cover/history/x", headers=USER).status_code, 404)


class ParseApiTests(ApiTestCase):
    def test_jd_parse(self):
        text = "Match Score\n82\nTop Strengths Based on JD\n- Teamwork\nMissing / Important Skills\n- Docker"
        response = self.client.post("/v1/jd/parse", json={"text": text})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["sections"],
            [
                {"title": "Match Score", "content": "82", "open": False},
                {"title": "Top Strengths Based on JD", "content": "• Teamwork", "open": False},
                {"title": "Missing / Important Skills", "content": "• Docker", "open": False},
            ],
        )

    def test_interview_parse(self):
        response = self.client.post(
            "/v1/interview/parse",
            json={"text": "Q1 Good answer. Q2 Needs detail. Overall Summary Strong candidate."},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([s["title"] for s in body["sections"]], ["Question 1", "Question 2"])
        self.assertEqual(body["summary"], "Overall Summary Strong candidate.")

        empty = self.client.post("/v1/interview/parse", json={"text": ""}).json()
        self.assertEqual(empty, {"sections": [], "summary": "No evaluation available"})


class ResumeAndJobApiTests(ApiTestCase):
    resume_text = (
        "Jane Doe - Frontend Engineer\n"
        "Built React dashboards used by 20k users and reduced bundle size by 35%."
    )

    def test_resume_analysis_needs_llm(self):
        response = self.client.post("/v1/resume/analyze", json={"resumeText": self.resume_text}, headers=USER)
        self.assertEqual(response.status_code, 503)

    def test_resume_analysis_rejects_short_text(self):
        response = self.client.post("/v1/resume/analyze", json={"resumeText": "too short"}, headers=USER)
        self.assertEqual(response.status_code, 400)

    def test_resume_analysis_is_sanitized_and_stored(self):
        payload = {"atsScore": 99, "skills": ["React", "TypeScript"], "strengths": ["Impact metrics"]}
        with patch("careerlens.services.resume_service.llm_enabled", return_value=True), patch(
            "careerlens.services.resume_service.json_completion", return_value=(payload, "{...}")
        ):
            response = self.client.post(
                "/v1/resume/analyze",
                json={"resumeText": self.resume_text, "fileName": "jane.pdf", "targetRole": "<b>Frontend</b>"},
                headers=USER,
            )
        self.assertEqual(response.status_code, 200)
        analysis = response.json()["analysis"]
        self.assertEqual(analysis["atsScore"], 80)
        self.assertEqual(analysis["skills"], ["React", "TypeScript"])
        self.assertEqual(analysis["targetRole"], "Frontend")
        self.assertEqual(analysis["fileName"], "jane.pdf")

        history = self.client.get("/v1/resume/history", headers=USER).json()
        self.assertEqual(history["count"], 1)

    def test_unparsable_resume_answer_returns_502(self):
        with patch("careerlens.services.resume_service.llm_enabled", return_value=True), patch(
            "careerlens.services.resume_service.json_completion", return_value=(None, "not json")
        ):
            response = self.client.post("/v1/resume/analyze", json={"resumeText": self.resume_text}, headers=USER)
        self.assertEqual(response.status_code, 502)
        history = self.client.get("/v1/resume/history", headers=USER).json()
        self.assertEqual(history["history"][0]["analysisText"], "not json")

    def test_jd_analysis_requires_resume(self):
        response = self.client.post(
            "/v1/jd/analyze",
            json={"jobTitle": "Frontend Engineer", "jobDescription": "We need React and TypeScript experience."},
            headers=USER,
        )
        self.assertEqual(response.status_code, 400)

    def test_jd_analysis_without_llm_stores_empty_analysis(self):
        self._seed_pair()
        response = self.client.post(
            "/v1/jd/analyze",
            json={"jobTitle": "Frontend Engineer", "jobDescription": "We need React and TypeScript experience."},
            headers=USER,
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNone(body["analysis"]["matchScore"])
        self.assertEqual(body["analysis"]["missingSkills"], [])
        self.assertEqual(body["sections"], [])
        self.assertEqual(self.client.get("/v1/jd/history", headers=USER).json()["count"], 2)

    def test_jd_analysis_with_ai_payload(self):
        self._seed_pair()
        payload = {
            "matchScore": 64,
            "fitVerdict": "Maybe",
            "strengthsBasedOnJD": ["React"],
            "missingSkills": ["GraphQL"],
        }
        with patch("careerlens.services.jd_service.json_completion", return_value=(payload, "{...}")):
            response = self.client.post(
                "/v1/jd/analyze",
                json={"jobTitle": "Frontend Engineer", "jobDescription": "We need React and GraphQL experience."},
                headers=USER,
            )
        self.assertEqual(response.status_code, 200)
        analysis = response.json()["analysis"]
        self.assertEqual(analysis["matchScore"], 64)
        self.assertEqual(analysis["strengthsBasedOnJD"], ["React"])
        self.assertEqual(analysis["missingSkills"], ["GraphQL"])


class InterviewApiTests(ApiTestCase):
    evaluation = (
        "Q1 Feedback:\nScore: 80/100\n"
        "Q2 Feedback:\nScore: 50/100\n"
        "Overall Summary:\nOverall Score: 65/100\n"
    )

    def test_questions_fall_back_to_line_split(self):
        raw = "1. Explain event loop in Node\n2) How would you shard a database?\nok"
        with patch("careerlens.services.interview_service.text_completion_required", return_value=raw):
            response = self.client.post(
                "/v1/interview/questions",
                json={"role": "Backend Engineer", "difficulty": "medium", "questionCount": 5},
                headers=USER,
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["questions"],
            ["Explain event loop in Node", "How would you shard a database?"],
        )

    def test_questions_from_json_array_are_capped(self):
        raw = '["Q one?", "Q two?", "Q three?"]'
        with patch("careerlens.services.interview_service.text_completion_required", return_value=raw):
            response = self.client.post(
                "/v1/interview/questions",
                json={"role": "Frontend", "difficulty": "easy", "questionCount": 2},
                headers=USER,
            )
        self.assertEqual(response.json()["questions"], ["Q one?", "Q two?"])

    def test_questions_need_llm(self):
        response = self.client.post(
            "/v1/interview/questions",
            json={"role": "Frontend", "difficulty": "easy", "questionCount": 2},
            headers=USER,
        )
        self.assertEqual(response.status_code, 503)

    def test_evaluate_interview(self):
        with patch(
            "careerlens.services.interview_service.text_completion_required", return_value=self.evaluation
        ):
            response = self.client.post(
                "/v1/interview/evaluate",
                json={
                    "role": "Backend Engineer",
                    "difficulty": "hard",
                    "questionCount": 2,
                    "questions": ["q1", "q2"],
                    "answers": ["a1", "a2"],
                },
                headers=USER,
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["score"], 65)
        self.assertEqual(len(body["parsed"]["sections"]), 2)
        self.assertTrue(body["parsed"]["summary"].startswith("Overall Summary"))

        history = self.client.get("/v1/interview/history", headers=USER).json()
        self.assertEqual(history["count"], 1)
        self.assertEqual(history["history"][0]["score"], 65)

    def test_evaluate_requires_answers(self):
        response = self.client.post(
            "/v1/interview/evaluate",
            json={"role": "Backend", "difficulty": "hard", "questionCount": 1, "questions": ["q1"]},
            headers=USER,
        )
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
