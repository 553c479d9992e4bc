from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass
class ProjectSubmission:
    """
    A project handed in for an event, either by a team or a single user.

    Lifecycle: draft -> submitted -> approved (through review).
    See projects.state_machine for the allowed moves.
    """
    STATUS_NOT_SUBMITTED = "not_submitted"
    STATUS_DRAFT = "draft"
    STATUS_SUBMITTED = "submitted"
    STATUS_UNDER_REVIEW = "under_review"
    STATUS_APPROVED = "approved"
    STATUS_NEEDS_REVISION = "needs_revision"

    STATUS_CHOICES = [
        (STATUS_NOT_SUBMITTED, "Not submitted"),
        (STATUS_DRAFT, "Draft"),
        (STATUS_SUBMITTED, "Submitted"),
        (STATUS_UNDER_REVIEW, "Under review"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_NEEDS_REVISION, "Needs revision"),
    ]

    id: str
    event_id: str
    user_id: str
    title: str
    team_id: Optional[str] = None
    description: Optional[str] = None
    status: str = STATUS_DRAFT
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewer_id: Optional[str] = None
    review_notes: Optional[str] = None
    score: Optional[Decimal] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    video_url: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    is_public: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self):
        return f"{self.title} ({self.status})"


@dataclass
class SubmissionFile:
    TYPE_IMAGE = "image"
    TYPE_DOCUMENT = "document"

    id: str
    submission_id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    file_url: str
    file_type: str = TYPE_DOCUMENT
    uploaded_at: Optional[datetime] = None

    @classmethod
    def type_for_mime(cls, mime_type):
        return cls.TYPE_IMAGE if (mime_type or "").startswith("image/") else cls.TYPE_DOCUMENT
