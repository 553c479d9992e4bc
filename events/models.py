# events/models.py
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


DEFAULT_ALLOWED_FILE_TYPES = ["pdf", "doc", "docx", "zip", "png", "jpg"]


@dataclass
class Event:
    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_REGISTRATION_OPEN = "registration_open"
    STATUS_LIVE = "live"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_REGISTRATION_OPEN, "Registration open"),
        (STATUS_LIVE, "Live"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    TYPE_HACKATHON = "hackathon"
    TYPE_WORKSHOP = "workshop"
    TYPE_QUIZ = "quiz"
    TYPE_CONFERENCE = "conference"
    TYPE_NETWORKING = "networking"

    TYPE_CHOICES = [
        (TYPE_HACKATHON, "Hackathon"),
        (TYPE_WORKSHOP, "Workshop"),
        (TYPE_QUIZ, "Quiz"),
        (TYPE_CONFERENCE, "Conference"),
        (TYPE_NETWORKING, "Networking"),
    ]

    id: str
    title: str
    type: str
    organizer_id: str
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    status: str = STATUS_DRAFT
    location: Optional[str] = None
    is_virtual: bool = False
    max_participants: Optional[int] = None
    registration_fee: Decimal = Decimal("0.00")
    prize_pool: Decimal = Decimal("0.00")
    requirements: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    image_url: Optional[str] = None

    # RSVP + submission settings
    rsvp_deadline: Optional[datetime] = None
    project_submission_deadline: Optional[datetime] = None
    allow_withdrawal: bool = True
    require_project_submission: bool = False
    project_submission_instructions: Optional[str] = None
    max_file_size: int = 10  # MB
    allowed_file_types: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_FILE_TYPES))

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self):
        return self.title


@dataclass
class EventRegistration:
    STATUS_PENDING = "pending"
    STATUS_ACCEPTED = "accepted"
    STATUS_REJECTED = "rejected"
    STATUS_WITHDRAWN = "withdrawn"
    STATUS_WAITLIST = "waitlist"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_WITHDRAWN, "Withdrawn"),
        (STATUS_WAITLIST, "Waitlist"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_COMPLETED = "completed"
    PAYMENT_FAILED = "failed"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_COMPLETED, "Completed"),
        (PAYMENT_FAILED, "Failed"),
    ]

    id: str
    event_id: str
    user_id: str
    team_id: Optional[str] = None
    payment_status: str = PAYMENT_PENDING
    payment_intent_id: Optional[str] = None
    status: str = STATUS_PENDING
    checked_in_at: Optional[datetime] = None
    withdrawn_at: Optional[datetime] = None
    withdrawal_reason: Optional[str] = None
    organizer_notes: Optional[str] = None
    registered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self):
        return self.status != self.STATUS_WITHDRAWN


@dataclass
class ChatMessage:
    TYPE_TEXT = "text"
    TYPE_FILE = "file"
    TYPE_IMAGE = "image"

    TYPE_CHOICES = [
        (TYPE_TEXT, "Text"),
        (TYPE_FILE, "File"),
        (TYPE_IMAGE, "Image"),
    ]

    id: str
    user_id: str
    message: str
    event_id: Optional[str] = None
    team_id: Optional[str] = None
    message_type: str = TYPE_TEXT
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class EventAnalytic:
    id: str
    event_id: str
    metric: str
    value: Decimal
    date: Optional[datetime] = None


@dataclass
class EventRsvp:
    STATUS_PENDING = "pending"
    STATUS_ACCEPTED = "accepted"
    STATUS_DECLINED = "declined"
    STATUS_CONFIRMED = "confirmed"
    STATUS_NO_SHOW = "no_show"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_DECLINED, "Declined"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_NO_SHOW, "No show"),
    ]

    id: str
    event_id: str
    user_id: str
    registration_id: str
    status: str = STATUS_PENDING
    responded_at: Optional[datetime] = None
    reminders_sent: int = 0
    last_reminder_at: Optional[datetime] = None
    dietary_restrictions: Optional[str] = None
    accessibility_needs: Optional[str] = None
    emergency_contact: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
