# ux/services/dashboard.py

from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from events.models import EventRegistration

RECENT_WINDOW = timedelta(days=7)


def get_dashboard_summary(storage, user):
    """
    Per-user aggregate across organized and registered events.

    Revenue counts completed payments on the user's own events at the
    event's registration fee.
    """
    now = timezone.now()

    organized = storage.get_events_by_organizer(user.id)
    registered = storage.get_user_events(user.id)
    unread = storage.get_user_notifications(user.id, unread_only=True)

    total_participants = 0
    total_revenue = Decimal("0")
    upcoming = 0
    completed = 0

    for event in organized:
        registrations = [r for r in storage.get_event_registrations(event.id) if r.is_active]
        total_participants += len(registrations)

        paid = sum(
            1 for r in registrations
            if r.payment_status == EventRegistration.PAYMENT_COMPLETED
        )
        total_revenue += paid * (event.registration_fee or Decimal("0"))

        if event.start_date > now:
            upcoming += 1
        elif event.end_date < now:
            completed += 1

    week_ago = now - RECENT_WINDOW
    recent_registrations = sum(
        1 for r in storage.get_user_registrations(user.id)
        if r.is_active and r.registered_at and r.registered_at > week_ago
    )

    return {
        "organized_events": len(organized),
        "registered_events": len(registered),
        "unread_notifications": len(unread),
        "total_participants": total_participants,
        "total_revenue": float(total_revenue.quantize(Decimal("0.01"))),
        "upcoming_events": upcoming,
        "completed_events": completed,
        "recent_registrations": recent_registrations,
        "achievements": {
            "events_organized": len(organized) >= 5,
            "community_builder": total_participants >= 100,
            "active_participant": len(registered) >= 10,
        },
    }
