from datetime import timedelta
from decimal import Decimal

from django.core import mail
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status

from core.tests.mixins import StorageTestMixin
from events.models import Event, EventRegistration


class DiscoveryApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.user = self.make_user("u1", skills=["Python"])
        self.hack = self.make_event(self.organizer, title="PyHack", tags=["python"])
        self.talk = self.make_event(self.organizer, title="Talks", type=Event.TYPE_CONFERENCE)
        self.draft = self.make_event(self.organizer, title="Draft", status=Event.STATUS_DRAFT)

    def test_discover_filters_by_type(self):
        resp = self.client.get("/api/events/discover/?type=conference")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        body = resp.json()
        self.assertTrue(body["meta"]["success"])
        self.assertEqual([e["title"] for e in body["data"]["events"]], ["Talks"])

    def test_trending_skips_drafts(self):
        self.storage.register_for_event(self.talk.id, "u1")
        resp = self.client.get("/api/events/trending/")

        titles = [e["title"] for e in resp.json()["data"]["events"]]
        self.assertEqual(titles[0], "Talks")
        self.assertNotIn("Draft", titles)

    def test_recommended_uses_stored_recommendations(self):
        self.storage.generate_recommendations("u1")
        self.auth(self.user)

        resp = self.client.get("/api/events/recommended/")
        self.assertEqual([e["title"] for e in resp.json()["data"]["events"]], ["PyHack"])

    def test_search(self):
        resp = self.client.get("/api/search/?q=hack")
        self.assertEqual([e["title"] for e in resp.json()["data"]["events"]], ["PyHack"])

        resp = self.client.get("/api/search/")
        self.assertEqual(resp.json()["data"]["events"], [])


class AIRecommendationApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.user = self.make_user("u1", skills=["Python"], interests=["AI"])
        self.event = self.make_event(self.organizer, tags=["python"])
        self.team = self.make_team(self.organizer, self.event, skills=["Python"])
        self.auth(self.user)

    def test_generate_then_list_by_type(self):
        resp = self.client.post("/api/ai/generate-recommendations/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"]["count"], 2)

        resp = self.client.get("/api/ai/recommendations/?type=team")
        recs = resp.json()["data"]["recommendations"]
        self.assertEqual(len(recs), 1)
        self.assertEqual(recs[0]["entity_id"], self.team.id)
        self.assertEqual(recs[0]["score"], "0.80")

        resp = self.client.get("/api/ai/recommendations/")
        self.assertEqual(len(resp.json()["data"]["recommendations"]), 2)


class DashboardApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        now = timezone.now()
        self.upcoming = self.make_event(self.organizer, registration_fee=Decimal("250.00"))
        self.past = self.make_event(
            self.organizer,
            start_date=now - timedelta(days=3),
            end_date=now - timedelta(days=2),
        )
        for uid in ("a", "b", "c"):
            self.make_user(uid)
            reg = self.storage.register_for_event(self.upcoming.id, uid)
            if uid != "c":
                self.storage.update_registration_payment_status(
                    reg.id, EventRegistration.PAYMENT_COMPLETED, f"pi_{uid}"
                )
        self.make_user("d")
        dropped = self.storage.register_for_event(self.upcoming.id, "d")
        self.storage.withdraw_from_event(dropped.id, "changed plans")
        self.storage.register_for_event(self.past.id, "org")
        self.storage.create_notification({"user_id": "org", "title": "t", "message": "m"})

    def test_user_dashboard_stats(self):
        self.auth(self.organizer)
        resp = self.client.get("/api/dashboard/stats/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        stats = resp.json()["data"]["stats"]
        self.assertEqual(stats["organized_events"], 2)
        self.assertEqual(stats["registered_events"], 1)
        self.assertEqual(stats["unread_notifications"], 1)
        self.assertEqual(stats["total_participants"], 4)
        self.assertEqual(stats["total_revenue"], 500.0)
        self.assertEqual(stats["upcoming_events"], 1)
        self.assertEqual(stats["completed_events"], 1)
        self.assertEqual(stats["recent_registrations"], 1)
        self.assertFalse(stats["achievements"]["events_organized"])


class OrganizerDashboardApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.user = self.make_user("u1")
        self.event = self.make_event(self.organizer)
        self.registration = self.storage.register_for_event(self.event.id, "u1")

    def test_stats_forbidden_for_non_organizer(self):
        self.auth(self.user)
        resp = self.client.get(f"/api/events/{self.event.id}/dashboard/stats/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["message"], "Event not found or access denied")

    def test_stats_unknown_event(self):
        self.auth(self.organizer)
        resp = self.client.get("/api/events/missing/dashboard/stats/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_stats_and_participants(self):
        self.auth(self.organizer)
        resp = self.client.get(f"/api/events/{self.event.id}/dashboard/stats/")
        self.assertEqual(resp.json()["data"]["stats"]["total_registrations"], 1)

        resp = self.client.get(f"/api/events/{self.event.id}/dashboard/participants/")
        participants = resp.json()["data"]["participants"]
        self.assertEqual(participants[0]["user"]["id"], "u1")
        self.assertEqual(participants[0]["registration"]["id"], self.registration.id)
        self.assertIsNone(participants[0]["rsvp"])

    def test_announce_notifies_and_emails(self):
        self.auth(self.organizer)
        resp = self.client.post(f"/api/events/{self.event.id}/dashboard/announce/", {
            "subject": "Venue change",
            "message": "Hall B now",
        })

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["data"]["recipients"], 1)
        self.assertEqual(self.storage.get_user_notifications("u1")[0].title, "Venue change")
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("Venue change", mail.outbox[0].subject)

    def test_announce_forbidden_for_participant(self):
        self.auth(self.user)
        resp = self.client.post(f"/api/events/{self.event.id}/dashboard/announce/", {
            "subject": "Spam",
            "message": "Spam",
        })
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.storage.get_user_notifications("u1"), [])
