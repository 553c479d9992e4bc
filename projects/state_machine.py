# projects/state_machine.py
"""
Project submission lifecycle.

draft -> submitted -> approved
           |     \
           |      -> needs_revision -> submitted
           -> under_review -> approved | needs_revision

Any transition not in VALID_TRANSITIONS is rejected.
"""
from typing import Tuple
import logging

from .models import ProjectSubmission

logger = logging.getLogger("ovento.projects")


VALID_TRANSITIONS = {
    ProjectSubmission.STATUS_NOT_SUBMITTED: [ProjectSubmission.STATUS_DRAFT, ProjectSubmission.STATUS_SUBMITTED],
    ProjectSubmission.STATUS_DRAFT: [ProjectSubmission.STATUS_SUBMITTED],
    ProjectSubmission.STATUS_SUBMITTED: [
        ProjectSubmission.STATUS_UNDER_REVIEW,
        ProjectSubmission.STATUS_APPROVED,
        ProjectSubmission.STATUS_NEEDS_REVISION,
    ],
    ProjectSubmission.STATUS_UNDER_REVIEW: [
        ProjectSubmission.STATUS_APPROVED,
        ProjectSubmission.STATUS_NEEDS_REVISION,
    ],
    ProjectSubmission.STATUS_NEEDS_REVISION: [ProjectSubmission.STATUS_SUBMITTED],
    ProjectSubmission.STATUS_APPROVED: [],
}


def can_transition(submission: ProjectSubmission, new_status: str) -> Tuple[bool, str]:
    """
    Check if a submission can move to a new status.

    Returns (can_transition: bool, reason: str)
    """
    current_status = submission.status

    if new_status not in dict(ProjectSubmission.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    allowed = VALID_TRANSITIONS.get(current_status, [])

    if new_status not in allowed:
        return False, f"Cannot transition from '{current_status}' to '{new_status}'"

    return True, ""


def check_transition(submission: ProjectSubmission, new_status: str, actor_id=None) -> Tuple[bool, str]:
    """
    Same as can_transition, but logs rejected attempts.
    """
    can, reason = can_transition(submission, new_status)
    if not can:
        logger.warning(
            f"Invalid submission transition attempted: submission={submission.id}, "
            f"from={submission.status}, to={new_status}, actor={actor_id or 'unknown'}. "
            f"Reason: {reason}"
        )
    return can, reason


def get_allowed_transitions(submission: ProjectSubmission) -> list:
    return VALID_TRANSITIONS.get(submission.status, [])
