"""Unit tests for app.services.profile_query: volunteer and NGO listing filters."""

import unittest

from app.core.errors import ValidationError
from app.services.profile_query import (
    NgoFilters,
    VolunteerFilters,
    search_ngos,
    search_volunteers,
    split_csv,
)

from support import create_user, make_store, ngo_body, volunteer_body


class TestSplitCsv(unittest.TestCase):
    def test_trims_and_drops_blanks(self) -> None:
        self.assertEqual(split_csv(" React, Python,,  "), ["React", "Python"])

    def test_none_and_empty(self) -> None:
        self.assertEqual(split_csv(None), [])
        self.assertEqual(split_csv(""), [])


class TestSearchVolunteers(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store()
        self.ada = create_user(
            self.store,
            volunteer_body(
                email="ada@example.com",
                skills=["Python", "Data"],
                interests=["Education"],
                experience="expert",
                availability="part-time",
                location="New York, NY",
            ),
        )
        self.grace = create_user(
            self.store,
            volunteer_body(
                email="grace@example.com",
                firstName="Grace",
                lastName="Hopper",
                skills=["COBOL"],
                interests=["Health"],
                experience="advanced",
                location="Arlington, VA",
            ),
        )
        create_user(self.store, ngo_body(location="New York, NY"))

    def tearDown(self) -> None:
        self.store.session.close()

    def _emails(self, **query: str) -> list[str]:
        results = search_volunteers(self.store, VolunteerFilters.from_query(**query))
        return sorted(u.email for u in results)

    def test_no_filters_lists_all_active_volunteers(self) -> None:
        self.assertEqual(self._emails(), ["ada@example.com", "grace@example.com"])

    def test_skill_absent_from_every_record_gives_empty_list(self) -> None:
        self.assertEqual(self._emails(skills="Haskell"), [])

    def test_skills_match_any_requested_value(self) -> None:
        self.assertEqual(
            self._emails(skills="COBOL,Python"), ["ada@example.com", "grace@example.com"]
        )
        self.assertEqual(self._emails(skills="Data"), ["ada@example.com"])

    def test_interests_filter(self) -> None:
        self.assertEqual(self._emails(interests="Health"), ["grace@example.com"])

    def test_tier_filters_match_exactly(self) -> None:
        self.assertEqual(self._emails(experience="advanced"), ["grace@example.com"])
        self.assertEqual(self._emails(availability="part-time"), ["ada@example.com"])

    def test_location_is_case_insensitive_substring(self) -> None:
        self.assertEqual(self._emails(location="new york"), ["ada@example.com"])
        self.assertEqual(self._emails(location="VA"), ["grace@example.com"])

    def test_filters_combine(self) -> None:
        self.assertEqual(self._emails(skills="Python", location="arlington"), [])

    def test_inactive_volunteers_are_excluded(self) -> None:
        self.grace.is_active = False
        self.store.session.commit()
        self.assertEqual(self._emails(), ["ada@example.com"])

    def test_invalid_tier_value_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            VolunteerFilters.from_query(experience="guru")
        with self.assertRaises(ValidationError):
            VolunteerFilters.from_query(availability="sometimes")

    def test_results_are_public_views(self) -> None:
        result = search_volunteers(self.store, VolunteerFilters())[0]
        self.assertNotIn("passwordHash", result.model_dump(by_alias=True))


class TestSearchNgos(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store()
        create_user(
            self.store,
            ngo_body(
                email="help@example.org",
                focusAreas=["Education", "Health"],
                size="medium",
                location="San Francisco, CA",
            ),
        )
        create_user(
            self.store,
            ngo_body(
                email="green@example.org",
                organizationName="Green Earth",
                focusAreas=["Environment"],
                size="small",
                location="Portland, OR",
            ),
        )
        create_user(self.store, volunteer_body(location="San Francisco, CA"))

    def tearDown(self) -> None:
        self.store.session.close()

    def _emails(self, **query: str) -> list[str]:
        return sorted(u.email for u in search_ngos(self.store, NgoFilters.from_query(**query)))

    def test_no_filters_lists_only_ngos(self) -> None:
        self.assertEqual(self._emails(), ["green@example.org", "help@example.org"])

    def test_focus_areas_and_size(self) -> None:
        self.assertEqual(self._emails(focus_areas="Environment,Arts"), ["green@example.org"])
        self.assertEqual(self._emails(size="medium"), ["help@example.org"])
        self.assertEqual(self._emails(size="large"), [])

    def test_location(self) -> None:
        self.assertEqual(self._emails(location="san francisco"), ["help@example.org"])

    def test_invalid_size_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            NgoFilters.from_query(size="huge")


if __name__ == "__main__":
    unittest.main()
