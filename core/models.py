# core/models.py
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class AIRecommendation:
    TYPE_EVENT = "event"
    TYPE_TEAM = "team"

    TYPE_CHOICES = [
        (TYPE_EVENT, "Event"),
        (TYPE_TEAM, "Team"),
    ]

    id: str
    user_id: str
    type: str
    entity_id: str
    score: Decimal
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
