# core/storage.py
"""
In-memory storage engine for Ovento.

MemoryStorage is the single source of truth for every entity while the
process is alive. One instance is built at startup (see core.apps) and
handed to request handlers through ``request.storage``; tests build
their own.

Records are dataclasses. Updates never mutate a stored record in place,
they swap in a copy built with dataclasses.replace, so a record a caller
already holds does not change under it. Every multi-step mutation runs
under one re-entrant lock, and list queries scan a snapshot of the table
taken under the same lock.
"""
import logging
import secrets
import string
import threading
import time
from collections import defaultdict
from dataclasses import fields, replace
from datetime import timedelta
from decimal import Decimal

from django.apps import apps
from django.utils import timezone

from core import recommendations as scorer
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
from core.models import AIRecommendation
from events.models import ChatMessage, Event, EventAnalytic, EventRegistration, EventRsvp
from events.team_models import Team
from notifications.models import Notification
from projects import state_machine
from projects.models import ProjectSubmission, SubmissionFile
from users.models import User

logger = logging.getLogger("ovento.storage")


ID_ALPHABET = string.digits + string.ascii_lowercase
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 8

CHAT_HISTORY_LIMIT = 50
SEARCH_LIMIT = 20
TRENDING_LIMIT = 10
TEAMMATE_LIMIT = 20
REMINDER_INTERVAL = timedelta(hours=24)

ANNOUNCEMENT_RECIPIENTS = ("all", "accepted", "pending")

PROTECTED_FIELDS = ("id", "created_at", "registered_at", "uploaded_at")


def generate_id() -> str:
    """mem_<epoch ms>_<9 base36 chars>"""
    suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(9))
    return f"mem_{int(time.time() * 1000)}_{suffix}"


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def apply_updates(record, updates: dict):
    """
    Copy of ``record`` with ``updates`` applied.
    Unknown keys and identity fields are ignored; updated_at is stamped.
    """
    names = {f.name for f in fields(record)}
    changes = {
        key: value for key, value in updates.items()
        if key in names and key not in PROTECTED_FIELDS
    }
    if "updated_at" in names:
        changes["updated_at"] = timezone.now()
    return replace(record, **changes)


def get_storage() -> "MemoryStorage":
    """The process-wide store built by CoreConfig.ready()."""
    return apps.get_app_config("core").storage


class MemoryStorage:
    def __init__(self):
        self._lock = threading.RLock()

        self.users = {}
        self.events = {}
        self.teams = {}
        self.registrations = {}
        self.notifications = {}
        self.rsvps = {}
        self.submissions = {}
        self.submission_files = {}

        # ("event", id) / ("team", id) -> [ChatMessage], append-only
        self.chat_messages = defaultdict(list)
        # event_id -> [EventAnalytic], append-only
        self.analytics = defaultdict(list)
        # user_id -> [AIRecommendation], replaced wholesale
        self.recommendations = defaultdict(list)

    def atomic(self):
        """Hold the store lock across several calls (check-then-act in views)."""
        return self._lock

    def counts(self) -> dict:
        return {
            "users": len(self.users),
            "events": len(self.events),
            "teams": len(self.teams),
            "registrations": len(self.registrations),
            "notifications": len(self.notifications),
            "rsvps": len(self.rsvps),
            "submissions": len(self.submissions),
            "chat_messages": sum(len(v) for v in self._rows(self.chat_messages)),
        }

    def _rows(self, table):
        """Snapshot of a table's records, safe to scan while writers run."""
        with self._lock:
            return list(table.values())

    def _require(self, table, key, label):
        record = table.get(key)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    # -----------------------------
    # Users
    # -----------------------------
    def get_user(self, user_id):
        return self.users.get(user_id)

    def list_users(self):
        return self._rows(self.users)

    def upsert_user(self, data: dict) -> User:
        """
        Insert or update a user by id. created_at survives updates.
        """
        user_id = data.get("id")
        if not user_id:
            raise StorageError("User id is required")

        with self._lock:
            existing = self.users.get(user_id)
            if existing:
                user = apply_updates(existing, data)
            else:
                now = timezone.now()
                names = {f.name for f in fields(User)}
                values = {k: v for k, v in data.items() if k in names}
                values.update(created_at=now, updated_at=now)
                user = User(**values)
            self.users[user_id] = user
        return user

    def update_user_stripe_info(self, user_id, customer_id, subscription_id=None) -> User:
        with self._lock:
            user = self._require(self.users, user_id, "User")
            user = apply_updates(user, {
                "stripe_customer_id": customer_id,
                "stripe_subscription_id": subscription_id,
            })
            self.users[user_id] = user
        return user

    # -----------------------------
    # Events
    # -----------------------------
    def create_event(self, data: dict) -> Event:
        values = dict(data)
        now = timezone.now()
        values["id"] = values.get("id") or generate_id()
        values.update(created_at=now, updated_at=now)
        event = Event(**values)

        with self._lock:
            self.events[event.id] = event
        logger.info(f"Event created: id={event.id}, organizer={event.organizer_id}, title={event.title!r}")
        return event

    def get_event(self, event_id):
        return self.events.get(event_id)

    def get_events(self, type=None, status=None, search=None):
        """
        Linear scan; exact type/status match, case-insensitive title search.
        Newest start date first. No pagination.
        """
        needle = search.lower() if search else None
        result = [
            e for e in self._rows(self.events)
            if (not type or e.type == type)
            and (not status or e.status == status)
            and (not needle or needle in e.title.lower())
        ]
        return sorted(result, key=lambda e: e.start_date, reverse=True)

    def update_event(self, event_id, updates: dict) -> Event:
        with self._lock:
            event = self._require(self.events, event_id, "Event")
            event = apply_updates(event, updates)
            self.events[event_id] = event
        return event

    def delete_event(self, event_id):
        with self._lock:
            self._require(self.events, event_id, "Event")
            del self.events[event_id]
        logger.info(f"Event deleted: id={event_id}")

    def get_events_by_organizer(self, organizer_id):
        result = [e for e in self._rows(self.events) if e.organizer_id == organizer_id]
        return sorted(result, key=lambda e: e.created_at, reverse=True)

    def get_user_events(self, user_id):
        """Events the user holds an active registration for."""
        event_ids = {
            r.event_id for r in self._rows(self.registrations)
            if r.user_id == user_id and r.is_active
        }
        result = [e for e in (self.events.get(eid) for eid in event_ids) if e is not None]
        return sorted(result, key=lambda e: e.start_date, reverse=True)

    def search_events(self, query):
        return self.get_events(search=query)[:SEARCH_LIMIT]

    def get_registration_count(self, event_id) -> int:
        return sum(
            1 for r in self._rows(self.registrations)
            if r.event_id == event_id and r.is_active
        )

    def get_trending_events(self):
        """Published, not started yet, most registrations first."""
        now = timezone.now()
        upcoming = [
            e for e in self._rows(self.events)
            if e.status == Event.STATUS_PUBLISHED and e.start_date > now
        ]
        counts = {e.id: self.get_registration_count(e.id) for e in upcoming}
        upcoming.sort(key=lambda e: counts[e.id], reverse=True)
        return upcoming[:TRENDING_LIMIT]

    # -----------------------------
    # Registrations
    # -----------------------------
    def register_for_event(self, event_id, user_id, team_id=None) -> EventRegistration:
        """
        Creates a registration unconditionally. Duplicate and capacity
        policy lives in the API layer.
        """
        now = timezone.now()
        registration = EventRegistration(
            id=generate_id(),
            event_id=event_id,
            user_id=user_id,
            team_id=team_id,
            registered_at=now,
            updated_at=now,
        )
        with self._lock:
            self.registrations[registration.id] = registration
        logger.info(f"Registration created: user={user_id}, event={event_id}, team={team_id}")
        return registration

    def get_registration(self, registration_id):
        return self.registrations.get(registration_id)

    def find_registration(self, event_id, user_id, include_withdrawn=False):
        for r in self._rows(self.registrations):
            if r.event_id == event_id and r.user_id == user_id:
                if include_withdrawn or r.is_active:
                    return r
        return None

    def get_event_registrations(self, event_id):
        result = [r for r in self._rows(self.registrations) if r.event_id == event_id]
        return sorted(result, key=lambda r: r.registered_at, reverse=True)

    def get_user_registrations(self, user_id):
        result = [r for r in self._rows(self.registrations) if r.user_id == user_id]
        return sorted(result, key=lambda r: r.registered_at, reverse=True)

    def _update_registration(self, registration_id, updates):
        with self._lock:
            registration = self._require(self.registrations, registration_id, "Registration")
            registration = apply_updates(registration, updates)
            self.registrations[registration_id] = registration
        return registration

    def update_registration_payment_status(self, registration_id, payment_status, payment_intent_id=None):
        updates = {"payment_status": payment_status}
        if payment_intent_id:
            updates["payment_intent_id"] = payment_intent_id
        return self._update_registration(registration_id, updates)

    def update_registration_status(self, registration_id, status, organizer_notes=None):
        updates = {"status": status}
        if organizer_notes is not None:
            updates["organizer_notes"] = organizer_notes
        return self._update_registration(registration_id, updates)

    def withdraw_from_event(self, registration_id, reason=None):
        return self._update_registration(registration_id, {
            "status": EventRegistration.STATUS_WITHDRAWN,
            "withdrawn_at": timezone.now(),
            "withdrawal_reason": reason,
        })

    def bulk_update_registrations(self, registration_ids, status, organizer_notes=None):
        """Updates what it can; unknown ids are skipped."""
        updated = []
        with self._lock:
            for registration_id in registration_ids:
                try:
                    updated.append(self.update_registration_status(registration_id, status, organizer_notes))
                except NotFoundError:
                    logger.warning(f"Bulk update skipped unknown registration {registration_id}")
        return updated

    def check_in_participant(self, registration_id):
        return self._update_registration(registration_id, {"checked_in_at": timezone.now()})

    # -----------------------------
    # Teams
    # -----------------------------
    def _unique_invite_code(self):
        taken = {t.invite_code for t in self._rows(self.teams)}
        code = generate_invite_code()
        while code in taken:
            code = generate_invite_code()
        return code

    def create_team(self, data: dict) -> Team:
        """
        Stores a new team with a fresh invite code. The leader is the
        only member.
        """
        values = dict(data)
        if values.get("event_id") not in self.events:
            raise NotFoundError("Event not found")

        now = timezone.now()
        with self._lock:
            values.update(
                id=generate_id(),
                invite_code=self._unique_invite_code(),
                member_ids=[values["leader_id"]],
                created_at=now,
                updated_at=now,
            )
            team = Team(**values)
            self.teams[team.id] = team
        logger.info(f"Team created: id={team.id}, event={team.event_id}, leader={team.leader_id}")
        return team

    def get_team(self, team_id):
        return self.teams.get(team_id)

    def update_team(self, team_id, updates: dict) -> Team:
        # membership only changes through join/leave
        updates = {k: v for k, v in updates.items() if k not in ("member_ids", "invite_code", "leader_id")}
        with self._lock:
            team = self._require(self.teams, team_id, "Team")
            if "max_members" in updates and updates["max_members"] < team.current_size:
                raise StorageError("max_members cannot be lower than the current team size")
            team = apply_updates(team, updates)
            self.teams[team_id] = team
        return team

    def get_event_teams(self, event_id):
        result = [t for t in self._rows(self.teams) if t.event_id == event_id]
        return sorted(result, key=lambda t: t.name.lower())

    def get_user_teams(self, user_id, event_id=None):
        return [
            t for t in self._rows(self.teams)
            if user_id in t.member_ids and (event_id is None or t.event_id == event_id)
        ]

    def get_team_members(self, team_id):
        team = self._require(self.teams, team_id, "Team")
        return [self.users[uid] for uid in team.member_ids if uid in self.users]

    def get_team_by_invite_code(self, invite_code):
        code = (invite_code or "").strip().upper()
        for team in self._rows(self.teams):
            if team.invite_code == code:
                return team
        return None

    def _add_member(self, team, user_id):
        if team.is_full:
            raise TeamFullError()
        if user_id in team.member_ids:
            raise AlreadyMemberError()
        team = apply_updates(team, {"member_ids": team.member_ids + [user_id]})
        self.teams[team.id] = team
        logger.info(f"Team joined: team={team.id}, user={user_id}, size={team.current_size}/{team.max_members}")
        return team

    def join_team(self, team_id, user_id) -> Team:
        """
        Open teams only. Existing members get the team back unchanged,
        even when it is closed or full.
        """
        with self._lock:
            team = self._require(self.teams, team_id, "Team")
            if user_id in team.member_ids:
                return team
            if not team.is_open:
                raise TeamClosedError()
            return self._add_member(team, user_id)

    def join_team_by_invite_code(self, invite_code, user_id) -> Team:
        """
        The invite code is the credential: closed teams still accept it.
        Fails, without touching state, with "Invalid invite code",
        "Team is full" or "User is already a member" (checked in that order).
        """
        with self._lock:
            team = self.get_team_by_invite_code(invite_code)
            if team is None:
                raise InvalidInviteCodeError()
            return self._add_member(team, user_id)

    def leave_team(self, team_id, user_id) -> Team:
        with self._lock:
            team = self._require(self.teams, team_id, "Team")
            if user_id not in team.member_ids:
                raise NotTeamMemberError()
            if user_id == team.leader_id:
                raise LeaderCannotLeaveError()
            team = apply_updates(team, {"member_ids": [m for m in team.member_ids if m != user_id]})
            self.teams[team_id] = team
        logger.info(f"Team left: team={team_id}, user={user_id}")
        return team

    def find_teammates(self, user_id, skills):
        if not skills:
            return []
        wanted = set(skills)
        matches = [
            u for u in self._rows(self.users)
            if u.id != user_id and wanted.intersection(u.skills or [])
        ]
        return matches[:TEAMMATE_LIMIT]

    # -----------------------------
    # Chat
    # -----------------------------
    def create_chat_message(self, data: dict) -> ChatMessage:
        values = dict(data)
        if values.get("team_id"):
            key = ("team", values["team_id"])
        elif values.get("event_id"):
            key = ("event", values["event_id"])
        else:
            raise StorageError("Chat message needs an event or a team")

        values.update(id=generate_id(), created_at=timezone.now())
        message = ChatMessage(**values)
        with self._lock:
            self.chat_messages[key].append(message)
        return message

    def _chat_history(self, key, limit):
        # stored oldest first
        return list(reversed(self.chat_messages.get(key, [])))[:limit]

    def get_event_chat_messages(self, event_id, limit=CHAT_HISTORY_LIMIT):
        return self._chat_history(("event", event_id), limit)

    def get_team_chat_messages(self, team_id, limit=CHAT_HISTORY_LIMIT):
        return self._chat_history(("team", team_id), limit)

    # -----------------------------
    # AI recommendations
    # -----------------------------
    def create_ai_recommendation(self, user_id, type, entity_id, score, reason=None) -> AIRecommendation:
        recommendation = AIRecommendation(
            id=generate_id(),
            user_id=user_id,
            type=type,
            entity_id=entity_id,
            score=Decimal(str(score)),
            reason=reason,
            created_at=timezone.now(),
        )
        with self._lock:
            self.recommendations[user_id].append(recommendation)
        return recommendation

    def get_user_recommendations(self, user_id, type=None):
        result = [
            r for r in self.recommendations.get(user_id, [])
            if not type or r.type == type
        ]
        return sorted(result, key=lambda r: r.score, reverse=True)

    def get_recommended_events(self, user_id):
        event_ids = {r.entity_id for r in self.get_user_recommendations(user_id, AIRecommendation.TYPE_EVENT)}
        result = [e for e in (self.events.get(eid) for eid in event_ids) if e is not None]
        return sorted(result, key=lambda e: e.start_date, reverse=True)

    def generate_recommendations(self, user_id):
        """
        Replaces the user's recommendations with a fresh scoring pass
        over every event and open team.
        """
        user = self._require(self.users, user_id, "User")
        with self._lock:
            self.recommendations[user_id] = []
            for event in self._rows(self.events):
                result = scorer.recommend_event(user, event)
                if result:
                    score, reason = result
                    self.create_ai_recommendation(user_id, AIRecommendation.TYPE_EVENT, event.id, score, reason)
            for team, score, reason in scorer.recommend_teams(user, self._rows(self.teams)):
                self.create_ai_recommendation(user_id, AIRecommendation.TYPE_TEAM, team.id, score, reason)
            return self.get_user_recommendations(user_id)

    def initialize_ai_recommendations(self):
        for user in self._rows(self.users):
            self.generate_recommendations(user.id)

    # -----------------------------
    # Notifications
    # -----------------------------
    def create_notification(self, data: dict) -> Notification:
        values = dict(data)
        values.update(id=generate_id(), created_at=timezone.now())
        notification = Notification(**values)
        with self._lock:
            self.notifications[notification.id] = notification
        return notification

    def get_notification(self, notification_id):
        return self.notifications.get(notification_id)

    def get_user_notifications(self, user_id, unread_only=False):
        result = [
            n for n in self._rows(self.notifications)
            if n.user_id == user_id and not (unread_only and n.read)
        ]
        return sorted(result, key=lambda n: n.created_at, reverse=True)

    def mark_notification_read(self, notification_id) -> Notification:
        with self._lock:
            notification = self._require(self.notifications, notification_id, "Notification")
            notification = replace(notification, read=True)
            self.notifications[notification_id] = notification
        return notification

    def mark_all_notifications_read(self, user_id) -> int:
        with self._lock:
            unread = [n for n in self._rows(self.notifications) if n.user_id == user_id and not n.read]
            for notification in unread:
                self.notifications[notification.id] = replace(notification, read=True)
        return len(unread)

    # -----------------------------
    # Analytics
    # -----------------------------
    def record_event_metric(self, event_id, metric, value) -> EventAnalytic:
        analytic = EventAnalytic(
            id=generate_id(),
            event_id=event_id,
            metric=metric,
            value=Decimal(str(value)),
            date=timezone.now(),
        )
        with self._lock:
            self.analytics[event_id].append(analytic)
        return analytic

    def get_event_analytics(self, event_id, metric=None):
        result = [
            a for a in self.analytics.get(event_id, [])
            if not metric or a.metric == metric
        ]
        return sorted(result, key=lambda a: a.date, reverse=True)

    # -----------------------------
    # RSVPs
    # -----------------------------
    def create_rsvp(self, data: dict) -> EventRsvp:
        values = dict(data)
        now = timezone.now()
        values.update(id=generate_id(), created_at=now, updated_at=now)
        if values.get("status", EventRsvp.STATUS_PENDING) != EventRsvp.STATUS_PENDING:
            values["responded_at"] = now
        rsvp = EventRsvp(**values)
        with self._lock:
            self.rsvps[rsvp.id] = rsvp
        return rsvp

    def get_rsvp(self, rsvp_id):
        return self.rsvps.get(rsvp_id)

    def update_rsvp(self, rsvp_id, updates: dict) -> EventRsvp:
        updates = dict(updates)
        if updates.get("status") and updates["status"] != EventRsvp.STATUS_PENDING:
            updates["responded_at"] = timezone.now()
        with self._lock:
            rsvp = self._require(self.rsvps, rsvp_id, "RSVP")
            rsvp = apply_updates(rsvp, updates)
            self.rsvps[rsvp_id] = rsvp
        return rsvp

    def get_rsvps_by_event(self, event_id):
        result = [r for r in self._rows(self.rsvps) if r.event_id == event_id]
        return sorted(result, key=lambda r: r.created_at, reverse=True)

    def get_rsvp_by_user(self, event_id, user_id):
        for rsvp in self._rows(self.rsvps):
            if rsvp.event_id == event_id and rsvp.user_id == user_id:
                return rsvp
        return None

    def get_rsvps_needing_reminder(self, event_id):
        """
        Pending RSVPs not reminded in the last 24h. Events without an
        RSVP deadline never send reminders.
        """
        event = self._require(self.events, event_id, "Event")
        if not event.rsvp_deadline:
            return []
        cutoff = timezone.now() - REMINDER_INTERVAL
        return [
            r for r in self.get_rsvps_by_event(event_id)
            if r.status == EventRsvp.STATUS_PENDING
            and (r.last_reminder_at is None or r.last_reminder_at < cutoff)
        ]

    def send_rsvp_reminder(self, rsvp_id) -> EventRsvp:
        with self._lock:
            rsvp = self._require(self.rsvps, rsvp_id, "RSVP")
            rsvp = apply_updates(rsvp, {
                "reminders_sent": rsvp.reminders_sent + 1,
                "last_reminder_at": timezone.now(),
            })
            self.rsvps[rsvp_id] = rsvp
        return rsvp

    # -----------------------------
    # Project submissions
    # -----------------------------
    def create_project_submission(self, data: dict) -> ProjectSubmission:
        values = dict(data)
        now = timezone.now()
        values.update(
            id=generate_id(),
            status=ProjectSubmission.STATUS_DRAFT,
            created_at=now,
            updated_at=now,
        )
        submission = ProjectSubmission(**values)
        with self._lock:
            self.submissions[submission.id] = submission
        logger.info(f"Submission created: id={submission.id}, event={submission.event_id}, team={submission.team_id}")
        return submission

    def get_project_submission(self, submission_id):
        return self.submissions.get(submission_id)

    def update_project_submission(self, submission_id, updates: dict) -> ProjectSubmission:
        # status moves only through submit/review
        updates = {k: v for k, v in updates.items() if k not in ("status", "submitted_at", "reviewed_at")}
        with self._lock:
            submission = self._require(self.submissions, submission_id, "Project submission")
            submission = apply_updates(submission, updates)
            self.submissions[submission_id] = submission
        return submission

    def get_event_submissions(self, event_id):
        result = [s for s in self._rows(self.submissions) if s.event_id == event_id]
        return sorted(result, key=lambda s: s.updated_at, reverse=True)

    def get_team_submission(self, event_id, team_id):
        for submission in self._rows(self.submissions):
            if submission.event_id == event_id and submission.team_id == team_id:
                return submission
        return None

    def get_user_submission(self, event_id, user_id):
        for submission in self._rows(self.submissions):
            if submission.event_id == event_id and submission.user_id == user_id:
                return submission
        return None

    def _transition_submission(self, submission_id, new_status, actor_id, updates):
        with self._lock:
            submission = self._require(self.submissions, submission_id, "Project submission")
            can, reason = state_machine.check_transition(submission, new_status, actor_id)
            if not can:
                raise InvalidTransitionError(reason)
            submission = apply_updates(submission, dict(updates, status=new_status))
            self.submissions[submission_id] = submission
        logger.info(f"Submission {submission_id} moved to {new_status} by {actor_id or 'unknown'}")
        return submission

    def submit_project(self, submission_id, actor_id=None) -> ProjectSubmission:
        return self._transition_submission(
            submission_id,
            ProjectSubmission.STATUS_SUBMITTED,
            actor_id,
            {"submitted_at": timezone.now()},
        )

    def review_submission(self, submission_id, reviewer_id, score=None, notes=None,
                          status=ProjectSubmission.STATUS_APPROVED) -> ProjectSubmission:
        return self._transition_submission(
            submission_id,
            status,
            reviewer_id,
            {
                "reviewer_id": reviewer_id,
                "review_notes": notes,
                "score": Decimal(str(score)) if score is not None else None,
                "reviewed_at": timezone.now(),
            },
        )

    def create_submission_file(self, data: dict) -> SubmissionFile:
        values = dict(data)
        self._require(self.submissions, values.get("submission_id"), "Project submission")
        values.setdefault("file_type", SubmissionFile.type_for_mime(values.get("mime_type")))
        values.update(id=generate_id(), uploaded_at=timezone.now())
        submission_file = SubmissionFile(**values)
        with self._lock:
            self.submission_files[submission_file.id] = submission_file
        return submission_file

    def get_submission_file(self, file_id):
        return self.submission_files.get(file_id)

    def get_submission_files(self, submission_id):
        result = [f for f in self._rows(self.submission_files) if f.submission_id == submission_id]
        return sorted(result, key=lambda f: f.uploaded_at)

    def delete_submission_file(self, file_id):
        with self._lock:
            self._require(self.submission_files, file_id, "File")
            del self.submission_files[file_id]

    # -----------------------------
    # Organizer dashboard
    # -----------------------------
    def _organizer_event(self, event_id, organizer_id):
        event = self.events.get(event_id)
        if event is None or event.organizer_id != organizer_id:
            raise AccessDeniedError()
        return event

    def get_event_dashboard_stats(self, event_id, organizer_id) -> dict:
        self._organizer_event(event_id, organizer_id)

        registrations = self.get_event_registrations(event_id)
        rsvps = self.get_rsvps_by_event(event_id)
        submissions = self.get_event_submissions(event_id)

        def count(items, status):
            return sum(1 for item in items if item.status == status)

        return {
            "total_registrations": len(registrations),
            "accepted_registrations": count(registrations, EventRegistration.STATUS_ACCEPTED),
            "pending_registrations": count(registrations, EventRegistration.STATUS_PENDING),
            "withdrawn_registrations": count(registrations, EventRegistration.STATUS_WITHDRAWN),
            "checked_in_count": sum(1 for r in registrations if r.checked_in_at),
            "total_rsvps": len(rsvps),
            "confirmed_rsvps": count(rsvps, EventRsvp.STATUS_CONFIRMED),
            "pending_rsvps": count(rsvps, EventRsvp.STATUS_PENDING),
            "total_submissions": len(submissions),
            "submitted_projects": count(submissions, ProjectSubmission.STATUS_SUBMITTED),
            "approved_submissions": count(submissions, ProjectSubmission.STATUS_APPROVED),
        }

    def get_event_participants(self, event_id, organizer_id) -> list:
        self._organizer_event(event_id, organizer_id)
        participants = []
        for registration in self.get_event_registrations(event_id):
            participants.append({
                "user": self.users.get(registration.user_id),
                "registration": registration,
                "rsvp": self.get_rsvp_by_user(event_id, registration.user_id),
            })
        return participants

    def send_bulk_announcement(self, event_id, organizer_id, subject, message, recipient_type="all") -> list:
        """
        One event_announcement notification per matching registration.
        Returns the recipient user ids.
        """
        self._organizer_event(event_id, organizer_id)
        if recipient_type not in ANNOUNCEMENT_RECIPIENTS:
            raise StorageError(f"Invalid recipient type: {recipient_type}")

        recipients = []
        with self._lock:
            for registration in self.get_event_registrations(event_id):
                if recipient_type != "all" and registration.status != recipient_type:
                    continue
                self.create_notification({
                    "user_id": registration.user_id,
                    "title": subject,
                    "message": message,
                    "type": Notification.TYPE_EVENT_ANNOUNCEMENT,
                    "data": {"event_id": event_id, "announcement_type": "bulk"},
                })
                recipients.append(registration.user_id)

        logger.info(f"Bulk announcement sent to {len(recipients)} participants for event {event_id}")
        return recipients
