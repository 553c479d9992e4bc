from rest_framework.response import Response
from rest_framework import status

from core.exceptions import NotFoundError


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Small helper to standardize error responses across the API.
    Always returns: {"message": "<message>"} with the given status code.
    """
    return Response({"message": message}, status=status_code)


def get_event_or_404(storage, event_id):
    event = storage.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def get_team_or_404(storage, team_id):
    team = storage.get_team(team_id)
    if team is None:
        raise NotFoundError("Team not found")
    return team


def get_registration_or_404(storage, registration_id):
    registration = storage.get_registration(registration_id)
    if registration is None:
        raise NotFoundError("Registration not found")
    return registration


def user_can_edit_event(user, event) -> bool:
    """
    Only the organizer may edit/delete the event, see its registrants,
    analytics, RSVPs and dashboards, or manage registrations.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return event.organizer_id == user.id


def user_can_view_event_analytics(user, event) -> bool:
    """
    For now, same set as 'edit event'.
    """
    return user_can_edit_event(user, event)


def user_is_registered(storage, user, event) -> bool:
    if not user:
        return False
    return storage.find_registration(event.id, user.id) is not None


def user_can_access_event_chat(storage, user, event) -> bool:
    """Organizer or anyone holding an active registration."""
    return user_can_edit_event(user, event) or user_is_registered(storage, user, event)


def user_is_team_member(user, team) -> bool:
    return bool(user) and user.id in team.member_ids
