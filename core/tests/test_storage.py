import re
import threading
from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase
from django.utils import timezone

from core.exceptions import (
    AccessDeniedError,
    AlreadyMemberError,
    InvalidInviteCodeError,
    InvalidTransitionError,
    LeaderCannotLeaveError,
    NotFoundError,
    NotTeamMemberError,
    StorageError,
    TeamClosedError,
    TeamFullError,
)
from core.storage import MemoryStorage, generate_id, generate_invite_code
from core.tests.mixins import StorageTestMixin
from events.models import Event, EventRegistration, EventRsvp
from notifications.models import Notification
from projects.models import ProjectSubmission


class IdGenerationTests(SimpleTestCase):
    def test_generated_ids_have_expected_shape(self):
        self.assertRegex(generate_id(), r"^mem_\d+_[0-9a-z]{9}$")

    def test_generated_ids_are_unique(self):
        ids = {generate_id() for _ in range(500)}
        self.assertEqual(len(ids), 500)

    def test_invite_codes_are_eight_uppercase_alphanumerics(self):
        for _ in range(50):
            self.assertTrue(re.fullmatch(r"[A-Z0-9]{8}", generate_invite_code()))


class UserStorageTests(StorageTestMixin, SimpleTestCase):
    def test_upsert_inserts_then_updates_keeping_created_at(self):
        user = self.make_user("u1", first_name="Ann")
        updated = self.storage.upsert_user({"id": "u1", "first_name": "Anna", "skills": ["Python"]})

        self.assertEqual(updated.first_name, "Anna")
        self.assertEqual(updated.skills, ["Python"])
        self.assertEqual(updated.created_at, user.created_at)
        self.assertEqual(updated.email, "u1@example.com")

    def test_upsert_requires_id(self):
        with self.assertRaises(StorageError):
            self.storage.upsert_user({"email": "x@example.com"})

    def test_update_stripe_info_on_unknown_user(self):
        with self.assertRaisesMessage(NotFoundError, "User not found"):
            self.storage.update_user_stripe_info("nope", "cus_1")

    def test_update_stripe_info(self):
        self.make_user("u1")
        user = self.storage.update_user_stripe_info("u1", "cus_1", "sub_1")
        self.assertEqual(user.stripe_customer_id, "cus_1")
        self.assertEqual(user.stripe_subscription_id, "sub_1")


class EventStorageTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")

    def test_create_then_get_round_trip(self):
        event = self.make_event(self.organizer, title="Round Trip")
        fetched = self.storage.get_event(event.id)

        self.assertEqual(fetched, event)
        self.assertEqual(fetched.registration_fee, Decimal("0.00"))
        self.assertEqual(fetched.max_file_size, 10)

    def test_get_events_filters_and_sorts_by_start_desc(self):
        now = timezone.now()
        early = self.make_event(self.organizer, title="AI Early", start_date=now + timedelta(days=1),
                                end_date=now + timedelta(days=2))
        late = self.make_event(self.organizer, title="ai late", start_date=now + timedelta(days=5),
                               end_date=now + timedelta(days=6))
        self.make_event(self.organizer, title="Workshop", type=Event.TYPE_WORKSHOP)

        self.assertEqual(self.storage.get_events(search="AI"), [late, early])
        self.assertEqual(len(self.storage.get_events(type=Event.TYPE_WORKSHOP)), 1)
        self.assertEqual(self.storage.get_events(status=Event.STATUS_DRAFT), [])

    def test_update_keeps_protected_fields(self):
        event = self.make_event(self.organizer)
        updated = self.storage.update_event(event.id, {"title": "New", "id": "hijack", "created_at": None})

        self.assertEqual(updated.id, event.id)
        self.assertEqual(updated.title, "New")
        self.assertEqual(updated.created_at, event.created_at)
        # the record a caller already held is untouched
        self.assertEqual(event.title, "Test Event")

    def test_update_unknown_event(self):
        with self.assertRaisesMessage(NotFoundError, "Event not found"):
            self.storage.update_event("missing", {"title": "x"})

    def test_trending_only_upcoming_published_ranked_by_registrations(self):
        now = timezone.now()
        quiet = self.make_event(self.organizer, title="Quiet")
        busy = self.make_event(self.organizer, title="Busy")
        self.make_event(self.organizer, title="Draft", status=Event.STATUS_DRAFT)
        self.make_event(self.organizer, title="Past", start_date=now - timedelta(days=2),
                        end_date=now - timedelta(days=1))

        for uid in ("a", "b"):
            self.storage.register_for_event(busy.id, uid)
        self.storage.register_for_event(quiet.id, "a")

        self.assertEqual(self.storage.get_trending_events(), [busy, quiet])

    def test_user_events_exclude_withdrawn(self):
        event = self.make_event(self.organizer)
        reg = self.storage.register_for_event(event.id, "u1")
        self.assertEqual(self.storage.get_user_events("u1"), [event])

        self.storage.withdraw_from_event(reg.id, "busy")
        self.assertEqual(self.storage.get_user_events("u1"), [])
        self.assertEqual(self.storage.get_registration_count(event.id), 0)

    def test_search_is_capped(self):
        for i in range(25):
            self.make_event(self.organizer, title=f"Match {i}")
        self.assertEqual(len(self.storage.search_events("match")), 20)


class TeamStorageTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.leader = self.make_user("leader")
        self.event = self.make_event(self.leader)

    def test_create_team_makes_leader_the_only_member(self):
        team = self.make_team(self.leader, self.event)
        self.assertEqual(team.member_ids, ["leader"])
        self.assertRegex(team.invite_code, r"^[A-Z0-9]{8}$")

    def test_create_team_for_unknown_event(self):
        with self.assertRaises(NotFoundError):
            self.storage.create_team({"name": "T", "event_id": "missing", "leader_id": "leader"})

    def test_capacity_is_never_exceeded(self):
        team = self.make_team(self.leader, self.event, max_members=2)
        self.storage.join_team(team.id, "u1")

        with self.assertRaises(TeamFullError):
            self.storage.join_team(team.id, "u2")
        with self.assertRaises(TeamFullError):
            self.storage.join_team_by_invite_code(team.invite_code, "u2")

        self.assertEqual(self.storage.get_team(team.id).member_ids, ["leader", "u1"])

    def test_invite_code_errors_leave_state_untouched(self):
        team = self.make_team(self.leader, self.event)

        with self.assertRaisesMessage(InvalidInviteCodeError, "Invalid invite code"):
            self.storage.join_team_by_invite_code("ZZZZZZZZ", "u1")
        with self.assertRaisesMessage(AlreadyMemberError, "User is already a member"):
            self.storage.join_team_by_invite_code(team.invite_code, "leader")

        self.assertEqual(self.storage.get_team(team.id).member_ids, ["leader"])

    def test_invite_code_is_case_insensitive_and_bypasses_closed(self):
        team = self.make_team(self.leader, self.event, is_open=False)
        joined = self.storage.join_team_by_invite_code(team.invite_code.lower(), "u1")
        self.assertEqual(joined.member_ids, ["leader", "u1"])

    def test_join_closed_team_by_id(self):
        team = self.make_team(self.leader, self.event, is_open=False)
        with self.assertRaises(TeamClosedError):
            self.storage.join_team(team.id, "u1")

    def test_join_by_id_is_idempotent_for_members(self):
        team = self.make_team(self.leader, self.event, max_members=2)
        first = self.storage.join_team(team.id, "u1")
        again = self.storage.join_team(team.id, "u1")

        self.assertEqual(again.member_ids, ["leader", "u1"])
        self.assertIs(again, first)

        # full and closed: still a no-op for someone already in
        self.storage.update_team(team.id, {"is_open": False})
        self.assertEqual(self.storage.join_team(team.id, "leader").member_ids, ["leader", "u1"])

    def test_full_is_checked_before_membership(self):
        team = self.make_team(self.leader, self.event, max_members=1)
        with self.assertRaises(TeamFullError):
            self.storage.join_team_by_invite_code(team.invite_code, "leader")

    def test_leave_team(self):
        team = self.make_team(self.leader, self.event)
        self.storage.join_team(team.id, "u1")

        left = self.storage.leave_team(team.id, "u1")
        self.assertEqual(left.member_ids, ["leader"])

        with self.assertRaises(NotTeamMemberError):
            self.storage.leave_team(team.id, "u1")
        with self.assertRaises(LeaderCannotLeaveError):
            self.storage.leave_team(team.id, "leader")

    def test_update_team_cannot_touch_membership_or_shrink_below_size(self):
        team = self.make_team(self.leader, self.event)
        self.storage.join_team(team.id, "u1")

        updated = self.storage.update_team(team.id, {"member_ids": [], "name": "Renamed"})
        self.assertEqual(updated.member_ids, ["leader", "u1"])
        self.assertEqual(updated.name, "Renamed")

        with self.assertRaises(StorageError):
            self.storage.update_team(team.id, {"max_members": 1})

    def test_event_teams_sorted_by_name(self):
        self.make_team(self.leader, self.event, name="beta")
        self.make_team(self.leader, self.event, name="Alpha")
        names = [t.name for t in self.storage.get_event_teams(self.event.id)]
        self.assertEqual(names, ["Alpha", "beta"])

    def test_find_teammates(self):
        self.make_user("py", skills=["Python", "Go"])
        self.make_user("js", skills=["JavaScript"])
        self.make_user("me", skills=["Python"])

        found = self.storage.find_teammates("me", ["Python"])
        self.assertEqual([u.id for u in found], ["py"])
        self.assertEqual(self.storage.find_teammates("me", []), [])


class ChatStorageTests(StorageTestMixin, SimpleTestCase):
    def test_history_is_newest_first_and_capped(self):
        for i in range(55):
            self.storage.create_chat_message({"event_id": "e1", "user_id": "u1", "message": f"m{i}"})

        history = self.storage.get_event_chat_messages("e1")
        self.assertEqual(len(history), 50)
        self.assertEqual(history[0].message, "m54")
        self.assertEqual(self.storage.get_team_chat_messages("e1"), [])

    def test_message_needs_a_target(self):
        with self.assertRaises(StorageError):
            self.storage.create_chat_message({"user_id": "u1", "message": "lost"})


class NotificationStorageTests(StorageTestMixin, SimpleTestCase):
    def test_unread_filter_and_mark_all(self):
        for title in ("a", "b", "c"):
            self.storage.create_notification({"user_id": "u1", "title": title, "message": "m"})
        other = self.storage.create_notification({"user_id": "u2", "title": "x", "message": "m"})

        first = self.storage.get_user_notifications("u1")[0]
        self.storage.mark_notification_read(first.id)
        self.assertEqual(len(self.storage.get_user_notifications("u1", unread_only=True)), 2)

        self.assertEqual(self.storage.mark_all_notifications_read("u1"), 2)
        self.assertEqual(self.storage.get_user_notifications("u1", unread_only=True), [])
        self.assertFalse(self.storage.get_notification(other.id).read)

    def test_default_type_is_system(self):
        n = self.storage.create_notification({"user_id": "u1", "title": "t", "message": "m"})
        self.assertEqual(n.type, Notification.TYPE_SYSTEM)


class RsvpStorageTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")

    def _rsvp(self, event, user_id, **extra):
        reg = self.storage.register_for_event(event.id, user_id)
        data = {"event_id": event.id, "user_id": user_id, "registration_id": reg.id}
        data.update(extra)
        return self.storage.create_rsvp(data)

    def test_responding_stamps_responded_at(self):
        event = self.make_event(self.organizer)
        rsvp = self._rsvp(event, "u1")
        self.assertIsNone(rsvp.responded_at)

        rsvp = self.storage.update_rsvp(rsvp.id, {"status": EventRsvp.STATUS_CONFIRMED})
        self.assertIsNotNone(rsvp.responded_at)

    def test_reminders_need_a_deadline(self):
        event = self.make_event(self.organizer)
        self._rsvp(event, "u1")
        self.assertEqual(self.storage.get_rsvps_needing_reminder(event.id), [])

    def test_reminder_window(self):
        event = self.make_event(self.organizer, rsvp_deadline=timezone.now() + timedelta(days=3))
        pending = self._rsvp(event, "u1")
        self._rsvp(event, "u2", status=EventRsvp.STATUS_CONFIRMED)

        self.assertEqual([r.id for r in self.storage.get_rsvps_needing_reminder(event.id)], [pending.id])

        reminded = self.storage.send_rsvp_reminder(pending.id)
        self.assertEqual(reminded.reminders_sent, 1)
        # reminded within the last day
        self.assertEqual(self.storage.get_rsvps_needing_reminder(event.id), [])


class SubmissionStorageTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.event = self.make_event(self.organizer)
        self.submission = self.storage.create_project_submission({
            "event_id": self.event.id,
            "user_id": "u1",
            "title": "Project",
        })

    def test_new_submission_is_public_draft(self):
        self.assertEqual(self.submission.status, ProjectSubmission.STATUS_DRAFT)
        self.assertTrue(self.submission.is_public)

    def test_submit_then_review(self):
        submitted = self.storage.submit_project(self.submission.id, actor_id="u1")
        self.assertEqual(submitted.status, ProjectSubmission.STATUS_SUBMITTED)
        self.assertIsNotNone(submitted.submitted_at)

        reviewed = self.storage.review_submission(submitted.id, "org", score=91.5, notes="Nice")
        self.assertEqual(reviewed.status, ProjectSubmission.STATUS_APPROVED)
        self.assertEqual(reviewed.score, Decimal("91.5"))
        self.assertEqual(reviewed.reviewer_id, "org")

    def test_review_before_submit_is_rejected(self):
        with self.assertRaises(InvalidTransitionError):
            self.storage.review_submission(self.submission.id, "org")
        self.assertEqual(
            self.storage.get_project_submission(self.submission.id).status,
            ProjectSubmission.STATUS_DRAFT,
        )

    def test_status_cannot_be_set_through_update(self):
        updated = self.storage.update_project_submission(
            self.submission.id, {"status": ProjectSubmission.STATUS_APPROVED, "title": "Renamed"}
        )
        self.assertEqual(updated.status, ProjectSubmission.STATUS_DRAFT)
        self.assertEqual(updated.title, "Renamed")

    def test_files(self):
        f = self.storage.create_submission_file({
            "submission_id": self.submission.id,
            "filename": "1-shot.png",
            "original_name": "shot.png",
            "mime_type": "image/png",
            "size": 10,
            "file_url": "/uploads/1-shot.png",
        })
        self.assertEqual(f.file_type, "image")
        self.assertEqual(self.storage.get_submission_files(self.submission.id), [f])

        self.storage.delete_submission_file(f.id)
        self.assertEqual(self.storage.get_submission_files(self.submission.id), [])

    def test_file_for_unknown_submission(self):
        with self.assertRaises(NotFoundError):
            self.storage.create_submission_file({"submission_id": "missing", "filename": "x", "original_name": "x",
                                                 "mime_type": "text/plain", "size": 1, "file_url": "/x"})


class OrganizerDashboardStorageTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.event = self.make_event(self.organizer)
        self.make_user("u1")
        self.make_user("u2")
        self.reg1 = self.storage.register_for_event(self.event.id, "u1")
        self.reg2 = self.storage.register_for_event(self.event.id, "u2")
        self.storage.update_registration_status(self.reg1.id, EventRegistration.STATUS_ACCEPTED)

    def test_stats_require_the_organizer(self):
        with self.assertRaisesMessage(AccessDeniedError, "Event not found or access denied"):
            self.storage.get_event_dashboard_stats(self.event.id, "u1")
        with self.assertRaises(AccessDeniedError):
            self.storage.get_event_dashboard_stats("missing", "org")

    def test_stats(self):
        self.storage.check_in_participant(self.reg1.id)
        stats = self.storage.get_event_dashboard_stats(self.event.id, "org")

        self.assertEqual(stats["total_registrations"], 2)
        self.assertEqual(stats["accepted_registrations"], 1)
        self.assertEqual(stats["pending_registrations"], 1)
        self.assertEqual(stats["checked_in_count"], 1)
        self.assertEqual(stats["total_submissions"], 0)

    def test_participants(self):
        participants = self.storage.get_event_participants(self.event.id, "org")
        self.assertEqual({p["user"].id for p in participants}, {"u1", "u2"})
        self.assertTrue(all(p["rsvp"] is None for p in participants))

    def test_bulk_announcement_by_recipient_type(self):
        recipients = self.storage.send_bulk_announcement(self.event.id, "org", "Hi", "Body", "accepted")
        self.assertEqual(recipients, ["u1"])

        notification = self.storage.get_user_notifications("u1")[0]
        self.assertEqual(notification.type, Notification.TYPE_EVENT_ANNOUNCEMENT)
        self.assertEqual(notification.data, {"event_id": self.event.id, "announcement_type": "bulk"})
        self.assertEqual(self.storage.get_user_notifications("u2"), [])

    def test_bulk_announcement_rejects_unknown_recipient_type(self):
        with self.assertRaises(StorageError):
            self.storage.send_bulk_announcement(self.event.id, "org", "Hi", "Body", "everyone")

    def test_bulk_update_skips_unknown_ids(self):
        updated = self.storage.bulk_update_registrations(
            [self.reg2.id, "missing"], EventRegistration.STATUS_REJECTED
        )
        self.assertEqual([r.id for r in updated], [self.reg2.id])


class RecommendationStorageTests(StorageTestMixin, SimpleTestCase):
    def test_generate_replaces_previous_and_sorts_by_score(self):
        organizer = self.make_user("org")
        user = self.make_user("u1", skills=["Python"], interests=["AI"])
        self.make_event(organizer, title="Py", tags=["python", "ai"], is_virtual=True)
        self.make_event(organizer, title="Plain", tags=["cooking"])

        first = self.storage.generate_recommendations(user.id)
        second = self.storage.generate_recommendations(user.id)

        self.assertEqual(len(first), 1)
        self.assertEqual(len(second), 1)
        self.assertEqual(second[0].score, Decimal("0.99"))
        self.assertEqual(len(self.storage.get_recommended_events(user.id)), 1)

    def test_fresh_storage_is_empty(self):
        self.assertEqual(set(MemoryStorage().counts().values()), {0})


class ConcurrentAccessTests(StorageTestMixin, SimpleTestCase):
    def test_queries_while_registrations_are_written(self):
        organizer = self.make_user("org")
        event = self.make_event(organizer)
        writes = 3000
        finished = threading.Event()
        errors = []

        def write():
            for i in range(writes):
                self.storage.register_for_event(event.id, f"user-{i}")
            finished.set()

        def read():
            try:
                while not finished.is_set():
                    self.storage.get_registration_count(event.id)
                    self.storage.get_event_registrations(event.id)
                    self.storage.get_user_events("user-1")
            except RuntimeError as e:
                errors.append(e)

        readers = [threading.Thread(target=read) for _ in range(3)]
        writer = threading.Thread(target=write)
        for thread in readers + [writer]:
            thread.start()
        for thread in readers + [writer]:
            thread.join(timeout=60)

        self.assertEqual(errors, [])
        self.assertEqual(self.storage.get_registration_count(event.id), writes)
