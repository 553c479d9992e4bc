# notifications/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Notification:
    TYPE_EVENT_RECOMMENDATION = "event_recommendation"
    TYPE_REGISTRATION_CONFIRMED = "registration_confirmed"
    TYPE_EVENT_ANNOUNCEMENT = "event_announcement"
    TYPE_TEAM_JOINED = "team_joined"
    TYPE_WELCOME = "welcome"
    TYPE_SYSTEM = "system"

    TYPE_CHOICES = [
        (TYPE_EVENT_RECOMMENDATION, "Event Recommendation"),
        (TYPE_REGISTRATION_CONFIRMED, "Registration Confirmed"),
        (TYPE_EVENT_ANNOUNCEMENT, "Event Announcement"),
        (TYPE_TEAM_JOINED, "Team Joined"),
        (TYPE_WELCOME, "Welcome"),
        (TYPE_SYSTEM, "System"),
    ]

    id: str
    user_id: str
    title: str
    message: str
    type: str = TYPE_SYSTEM
    read: bool = False
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __str__(self):
        return f"{self.user_id} - {self.type} - {self.title}"
