# ux/services/organizer.py

import logging

from events.emails import send_announcement_email
from events.serializers import RegistrationSerializer, RsvpSerializer
from users.serializers import UserSummarySerializer

logger = logging.getLogger("ovento.events")


def get_event_stats(storage, event_id, user):
    # AccessDeniedError (403) when the user does not organize the event
    return storage.get_event_dashboard_stats(event_id, user.id)


def get_event_participants(storage, event_id, user):
    participants = []
    for row in storage.get_event_participants(event_id, user.id):
        participants.append({
            "user": UserSummarySerializer(row["user"]).data if row["user"] else None,
            "registration": RegistrationSerializer(row["registration"]).data,
            "rsvp": RsvpSerializer(row["rsvp"]).data if row["rsvp"] else None,
        })
    return participants


def send_announcement(storage, event_id, user, subject, message, recipient_type="all", request=None):
    """
    Notifies matching participants in-app, then emails them.
    Returns the number of recipients.
    """
    recipient_ids = storage.send_bulk_announcement(event_id, user.id, subject, message, recipient_type)

    event = storage.get_event(event_id)
    users = [u for u in (storage.get_user(uid) for uid in recipient_ids) if u is not None]

    # Email is best-effort, the notifications are already stored
    try:
        send_announcement_email(users, event, subject, message, request=request)
    except Exception as e:
        logger.warning(f"Failed to send announcement emails for event {event_id}: {e}")

    return len(recipient_ids)
