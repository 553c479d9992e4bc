# events/team_models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Team:
    """
    Event team. The record owns its member list directly.

    Invariants kept by MemoryStorage:
    - len(member_ids) never exceeds max_members
    - leader_id is always in member_ids
    """
    id: str
    name: str
    event_id: str
    leader_id: str
    invite_code: str
    description: Optional[str] = None
    max_members: int = 4
    skills: List[str] = field(default_factory=list)
    is_open: bool = True
    member_ids: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def current_size(self):
        return len(self.member_ids)

    @property
    def is_full(self):
        return len(self.member_ids) >= self.max_members

    def __str__(self):
        return f"{self.name} ({self.event_id})"
