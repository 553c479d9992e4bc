from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase
from django.utils import timezone

from core.auth import DEMO_USER
from core.seed import EVENTS, USER_PROFILES, seed_demo_data
from core.storage import MemoryStorage


class SeedDemoDataTests(SimpleTestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.counts = seed_demo_data(self.storage, seed=7)

    def test_counts(self):
        self.assertEqual(self.counts["users"], len(USER_PROFILES) + 1)
        self.assertEqual(self.counts["events"], len(EVENTS))
        self.assertGreater(self.counts["registrations"], 0)
        self.assertGreater(self.counts["teams"], 0)
        self.assertIsNotNone(self.storage.get_user(DEMO_USER["id"]))

    def test_same_seed_same_shape(self):
        again = seed_demo_data(MemoryStorage(), seed=7)
        self.assertEqual(again, self.counts)

    def test_events_are_upcoming_and_published(self):
        now = timezone.now()
        for event in self.storage.get_events():
            self.assertGreater(event.start_date, now)
            self.assertGreater(event.end_date, event.start_date)
            self.assertEqual(event.status, "published")

    def test_organizers_never_register_for_their_own_events(self):
        for registration in self.storage.registrations.values():
            event = self.storage.get_event(registration.event_id)
            self.assertNotEqual(registration.user_id, event.organizer_id)

    def test_three_to_six_registrations_per_event(self):
        for event in self.storage.get_events():
            count = len(self.storage.get_event_registrations(event.id))
            self.assertGreaterEqual(count, 3)
            self.assertLessEqual(count, 6)

    def test_team_invariants(self):
        for team in self.storage.teams.values():
            self.assertIn(team.leader_id, team.member_ids)
            self.assertLessEqual(team.current_size, team.max_members)
            self.assertEqual(self.storage.get_event(team.event_id).type, "hackathon")

    def test_every_user_gets_a_welcome(self):
        for user in self.storage.list_users():
            types = {n.type for n in self.storage.get_user_notifications(user.id)}
            self.assertIn("welcome", types)


class SeedCommandTests(SimpleTestCase):
    def test_prints_counts(self):
        out = StringIO()
        call_command("seed_data", "--seed", "3", stdout=out)
        output = out.getvalue()

        self.assertIn(f"events: {len(EVENTS)}", output)
        self.assertIn("Seeding complete", output)
