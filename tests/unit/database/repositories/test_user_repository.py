#!/usr/bin/env python3
"""
Unit tests for UserRepository and MentorRepository reads.
"""

import unittest

from core.scorer.models import LEARNING_STYLES
from database.repositories import MentorRepository, UserRepository
from tests.fixtures.database import create_test_session_factory
from tests.fixtures.factories import make_assessment, make_goal, make_mentor, make_user


class RepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.session = create_test_session_factory()()

    def tearDown(self):
        self.session.close()
        self.session.get_bind().dispose()


class TestUserRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.repo = UserRepository(self.session)

    def test_get_user_and_profile(self):
        user = make_user(self.session, skills=['Python'])

        self.assertEqual(self.repo.get_user(user.id).id, user.id)
        self.assertEqual(self.repo.get_profile(user.id).skills[0]['name'], 'Python')
        self.assertIsNone(self.repo.get_user("missing"))
        self.assertIsNone(self.repo.get_profile("missing"))

    def test_active_assessment_is_latest_active(self):
        user = make_user(self.session)
        make_assessment(self.session, user.id, created_offset=1, visual=10)
        latest = make_assessment(self.session, user.id, created_offset=2, visual=20)
        make_assessment(self.session, user.id, created_offset=3, visual=30, is_active=False)

        self.assertEqual(self.repo.get_active_assessment(user.id).id, latest.id)

    def test_assessment_results_cover_every_scored_style(self):
        user = make_user(self.session)
        assessment = make_assessment(self.session, user.id, visual=40, kinesthetic=60)

        results = self.repo.get_active_assessment(user.id).learning_style_results

        self.assertEqual(tuple(results), LEARNING_STYLES)
        self.assertEqual(results['kinesthetic'], 60)
        self.assertEqual(results['reading'], 0)
        self.assertEqual(assessment.id, self.repo.get_active_assessment(user.id).id)

    def test_no_assessment(self):
        user = make_user(self.session)
        self.assertIsNone(self.repo.get_active_assessment(user.id))

    def test_career_goals_include_inactive(self):
        user = make_user(self.session)
        make_goal(self.session, user.id, title="First", created_offset=1)
        make_goal(self.session, user.id, title="Paused", created_offset=2, is_active=False)
        make_goal(self.session, user.id, title="Second", created_offset=3)

        goals = self.repo.get_career_goals(user.id)

        self.assertEqual([g.title for g in goals], ["First", "Paused", "Second"])

    def test_career_goals_belong_to_user(self):
        user = make_user(self.session)
        other = make_user(self.session)
        make_goal(self.session, other.id, title="Not mine")

        self.assertEqual(self.repo.get_career_goals(user.id), [])

    def test_list_all_user_ids_in_creation_order(self):
        users = [make_user(self.session, created_offset=i) for i in (3, 1, 2)]

        ids = self.repo.list_user_ids()

        self.assertEqual(ids, [users[1].id, users[2].id, users[0].id])
        self.assertEqual(self.repo.list_user_ids([]), ids)

    def test_list_user_ids_filters_unknown(self):
        user = make_user(self.session)
        make_user(self.session)

        with self.assertLogs('database.repositories.user', level='WARNING'):
            ids = self.repo.list_user_ids([user.id, "ghost"])

        self.assertEqual(ids, [user.id])


class TestMentorRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.repo = MentorRepository(self.session)

    def test_active_mentors(self):
        first = make_mentor(self.session, name="First", created_offset=1)
        make_mentor(self.session, name="Retired", created_offset=2, is_active=False)
        second = make_mentor(self.session, name="Second", created_offset=3)

        mentors = self.repo.get_active_mentors()

        self.assertEqual([m.id for m in mentors], [first.id, second.id])

    def test_mentor_defaults(self):
        mentor = make_mentor(self.session)
        self.assertEqual(
            mentor.learning_style_compatibility,
            {'visual': 5, 'auditory': 5, 'reading': 5, 'kinesthetic': 5}
        )
        self.assertEqual(mentor.rating, 4.5)


if __name__ == '__main__':
    unittest.main()
