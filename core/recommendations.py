# core/recommendations.py
"""
Rule-based recommendation scorer.

Fixed weights, no learning: a user/event pair starts at 0.5 and gains
points for skill/tag overlap, interest/tag overlap and virtual events.
Only pairs scoring above RECOMMEND_THRESHOLD are persisted, capped at
MAX_SCORE. Team suggestions use exact skill overlap with a flat score.
"""
from decimal import Decimal
from typing import List, Tuple

BASE_SCORE = Decimal("0.5")
SKILL_WEIGHT = Decimal("0.3")
INTEREST_WEIGHT = Decimal("0.2")
VIRTUAL_BONUS = Decimal("0.1")
RECOMMEND_THRESHOLD = Decimal("0.6")
MAX_SCORE = Decimal("0.99")

TEAM_SCORE = Decimal("0.8")
MAX_TEAM_CANDIDATES = 3


def _tag_matches(values, tags) -> List[str]:
    """Values that appear (case-insensitively) inside any of the tags."""
    lowered_tags = [t.lower() for t in tags or []]
    return [
        value for value in values or []
        if any(value.lower() in tag for tag in lowered_tags)
    ]


def score_event(user, event) -> Tuple[Decimal, List[str]]:
    """
    Returns (raw score, reasons) for a user/event pair.
    The raw score is not capped; see recommend_event.
    """
    score = BASE_SCORE
    reasons = []

    skill_matches = _tag_matches(user.skills, event.tags)
    if skill_matches:
        score += SKILL_WEIGHT
        reasons.append(f"Matches your skills: {', '.join(skill_matches)}")

    interest_matches = _tag_matches(user.interests, event.tags)
    if interest_matches:
        score += INTEREST_WEIGHT
        reasons.append(f"Aligns with your interests: {', '.join(interest_matches)}")

    if event.is_virtual:
        score += VIRTUAL_BONUS
        reasons.append("Virtual event - join from anywhere")

    return score, reasons


def recommend_event(user, event):
    """
    (score, reason) to persist, or None when the pair is below threshold.
    """
    score, reasons = score_event(user, event)
    if score <= RECOMMEND_THRESHOLD:
        return None
    return min(score, MAX_SCORE), "; ".join(reasons)


def recommend_teams(user, teams):
    """
    Yields (team, score, reason) for the first few open teams that share
    at least one skill with the user.
    """
    open_teams = [t for t in teams if t.is_open][:MAX_TEAM_CANDIDATES]
    user_skills = set(user.skills or [])
    for team in open_teams:
        overlap = [s for s in team.skills or [] if s in user_skills]
        if overlap:
            yield team, TEAM_SCORE, f"Great skill match: {', '.join(overlap)}"
