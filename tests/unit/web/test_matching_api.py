#!/usr/bin/env python3
"""
Unit tests for the matching API routes.

The MatchingService dependency is overridden, either with a mock or with a
real service bound to an in-memory database.
"""

import unittest
from datetime import datetime
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from core.exceptions import MatchNotFoundError, UserNotFoundError
from core.matcher.models import MentorMatchResult, MentorSummary, StoredMatch
from core.matching_service import MatchingService
from core.scorer import MatchFactors
from pipeline.batch import BatchMatchingResult
from pipeline.jobs import BatchJob, COMPLETED, RUNNING
from tests.fixtures.database import create_test_session_factory
from tests.fixtures.factories import make_mentor, make_user
from web.backend.app import create_app
from web.backend.dependencies import get_matching_service
from web.backend.routers.matching import limiter

WAIT_TIMEOUT = 10


def _stored_match(score=80):
    return StoredMatch(
        match_id="match-1",
        user_id="user-1",
        mentor_id="mentor-1",
        compatibility_score=score,
        match_factors=MatchFactors(skills_match=100),
        is_active=True,
        last_calculated=datetime(2026, 2, 1, 12, 0, 0),
        mentor=MentorSummary(
            mentor_id="mentor-1",
            name="Ada",
            specialization="Backend",
            bio="Writes databases",
            profile_image=None,
            experience_level="advanced",
            skills=["Python"],
            rating=4.8
        )
    )


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        limiter.enabled = False
        self.app = create_app()
        self.service = MagicMock(spec=MatchingService)
        self.app.dependency_overrides[get_matching_service] = lambda: self.service
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self):
        self.app.dependency_overrides.clear()
        limiter.enabled = True


class TestMatchingRoutes(ApiTestCase):

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_calculate(self):
        self.service.calculate_matching.return_value = [
            MentorMatchResult("mentor-1", "Ada", 77, MatchFactors(career_field_match=100))
        ]

        response = self.client.post("/api/matching/calculate/user-1")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["matches"][0]["compatibility_score"], 77)
        self.assertEqual(data["matches"][0]["match_factors"]["career_field_match"], 100)
        self.service.calculate_matching.assert_called_once_with("user-1")

    def test_calculate_unknown_user_is_404(self):
        self.service.calculate_matching.side_effect = UserNotFoundError("ghost")

        response = self.client.post("/api/matching/calculate/ghost")

        self.assertEqual(response.status_code, 404)
        data = response.json()
        self.assertFalse(data["success"])
        self.assertEqual(data["type"], "UserNotFoundError")

    def test_top_matches(self):
        self.service.get_top_matches.return_value = [_stored_match()]

        response = self.client.get("/api/matching/top/user-1?limit=3")

        self.assertEqual(response.status_code, 200)
        match = response.json()["matches"][0]
        self.assertEqual(match["mentor"]["name"], "Ada")
        self.assertEqual(match["last_calculated"], "2026-02-01T12:00:00")
        self.service.get_top_matches.assert_called_once_with("user-1", 3)

    def test_top_matches_without_limit_uses_service_default(self):
        self.service.get_top_matches.return_value = []

        response = self.client.get("/api/matching/top/user-1")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 0)
        self.service.get_top_matches.assert_called_once_with("user-1", None)

    def test_top_matches_rejects_bad_limit(self):
        self.assertEqual(self.client.get("/api/matching/top/user-1?limit=0").status_code, 422)
        self.assertEqual(self.client.get("/api/matching/top/user-1?limit=101").status_code, 422)
        self.service.get_top_matches.assert_not_called()

    def test_mentor_match(self):
        self.service.get_mentor_match.return_value = _stored_match(score=64)

        response = self.client.get("/api/matching/mentor/mentor-1?user_id=user-1")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["match"]["compatibility_score"], 64)
        self.service.get_mentor_match.assert_called_once_with("user-1", "mentor-1")

    def test_mentor_match_missing_is_404(self):
        self.service.get_mentor_match.side_effect = MatchNotFoundError("no match")

        response = self.client.get("/api/matching/mentor/mentor-1?user_id=user-1")

        self.assertEqual(response.status_code, 404)

    def test_unexpected_error_is_500(self):
        self.service.calculate_matching.side_effect = RuntimeError("db down")

        response = self.client.post("/api/matching/calculate/user-1")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["type"], "InternalError")

    def test_start_batch(self):
        self.service.run_batch_matching.return_value = BatchJob(job_id="job-1", user_ids=["a", "b"])

        response = self.client.post("/api/matching/batch", json={"user_ids": ["a", "b"]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["job_id"], "job-1")
        self.assertEqual(response.json()["total_users"], 2)
        self.service.run_batch_matching.assert_called_once_with(["a", "b"])

    def test_start_batch_without_body_runs_everyone(self):
        self.service.run_batch_matching.return_value = BatchJob(job_id="job-2", user_ids=[])

        response = self.client.post("/api/matching/batch")

        self.assertEqual(response.status_code, 200)
        self.service.run_batch_matching.assert_called_once_with(None)

    def test_batch_status_completed(self):
        job = BatchJob(job_id="job-1", user_ids=["a", "b"], status=COMPLETED)
        job.result = BatchMatchingResult(total=2, processed=1, failed=1, failed_user_ids=["b"], execution_time=0.2)
        self.service.get_batch_job.return_value = job

        data = self.client.get("/api/matching/batch/job-1").json()

        self.assertEqual(data["status"], "completed")
        self.assertEqual(data["processed"], 1)
        self.assertEqual(data["failed_user_ids"], ["b"])

    def test_batch_status_running_shows_progress(self):
        job = BatchJob(job_id="job-1", user_ids=["a", "b", "c"], status=RUNNING)
        job.progress = {"processed": 1, "failed": 0}
        self.service.get_batch_job.return_value = job

        data = self.client.get("/api/matching/batch/job-1").json()

        self.assertEqual(data["status"], "running")
        self.assertEqual(data["processed"], 1)
        self.assertIsNone(data["finished_at"])

    def test_list_batch_jobs(self):
        finished = BatchJob(job_id="job-2", user_ids=["a"], status=COMPLETED)
        finished.result = BatchMatchingResult(total=1, processed=1)
        running = BatchJob(job_id="job-1", user_ids=["a", "b"], status=RUNNING)
        self.service.list_batch_jobs.return_value = [finished, running]

        data = self.client.get("/api/matching/batch").json()

        self.assertEqual(data["count"], 2)
        self.assertEqual([j["job_id"] for j in data["jobs"]], ["job-2", "job-1"])
        self.assertEqual(data["jobs"][0]["processed"], 1)
        self.assertIsNone(data["jobs"][1]["processed"])

    def test_batch_status_unknown_job(self):
        self.service.get_batch_job.return_value = None

        response = self.client.get("/api/matching/batch/nope")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Batch job not found")


class TestMatchingRoutesWithDatabase(ApiTestCase):
    """Routes wired to a real MatchingService."""

    def setUp(self):
        super().setUp()
        self.session_factory = create_test_session_factory()
        self.service = MatchingService(session_factory=self.session_factory)

        session = self.session_factory()
        self.user_id = make_user(session, skills=['Python']).id
        self.mentor_id = make_mentor(session, name="Ada", skills=['python']).id
        session.commit()
        session.close()

    def tearDown(self):
        super().tearDown()
        self.session_factory.kw['bind'].dispose()

    def test_calculate_then_read(self):
        calculated = self.client.post(f"/api/matching/calculate/{self.user_id}").json()
        top = self.client.get(f"/api/matching/top/{self.user_id}").json()
        single = self.client.get(f"/api/matching/mentor/{self.mentor_id}?user_id={self.user_id}").json()

        self.assertEqual(calculated["count"], 1)
        self.assertEqual(top["matches"][0]["mentor_id"], self.mentor_id)
        self.assertEqual(
            top["matches"][0]["compatibility_score"],
            calculated["matches"][0]["compatibility_score"]
        )
        self.assertEqual(single["match"]["mentor"]["name"], "Ada")

    def test_batch_then_poll(self):
        job_id = self.client.post("/api/matching/batch", json={}).json()["job_id"]
        self.service.job_manager.wait(job_id, timeout=WAIT_TIMEOUT)

        data = self.client.get(f"/api/matching/batch/{job_id}").json()

        self.assertEqual(data["status"], "completed")
        self.assertEqual(data["processed"], 1)
        self.assertEqual(data["failed"], 0)


if __name__ == '__main__':
    unittest.main()
