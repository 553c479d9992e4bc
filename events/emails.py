# events/emails.py
from django.core.mail import send_mail
from django.conf import settings
from django.urls import reverse, NoReverseMatch


def build_event_url(request, event):
    """
    Build an absolute URL to the event detail endpoint.
    Falls back to simple path if request is None.
    """
    try:
        path = reverse("event-detail", args=[event.id])
    except NoReverseMatch:
        path = f"/api/events/{event.id}/"
    if request is not None:
        return request.build_absolute_uri(path)
    return path


def _greeting(user):
    return user.first_name or "there"


def _send(subject, message, recipients):
    send_mail(
        subject=subject,
        message=message,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=recipients,
        fail_silently=True,
    )


def send_registration_email(user, event, request=None):
    """
    Send a simple registration confirmation email
    to the attendee.
    """
    if not getattr(user, "email", None):
        # No email set, nothing to send
        return

    subject = f"Registered for {event.title}"
    event_url = build_event_url(request, event)

    message = (
        f"Hi {_greeting(user)},\n\n"
        f"You have successfully registered for the event:\n"
        f"  {event.title}\n"
        f"  Location: {event.location or 'TBA'}\n"
        f"  Starts: {event.start_date:%d %b %Y, %H:%M}\n\n"
        f"You can view the event details here:\n"
        f"{event_url}\n\n"
        f"Thank you,\n"
        f"Ovento"
    )

    _send(subject, message, [user.email])


def send_rsvp_reminder_email(user, event, request=None):
    if not getattr(user, "email", None):
        return

    deadline = f"{event.rsvp_deadline:%d %b %Y, %H:%M}" if event.rsvp_deadline else "soon"
    message = (
        f"Hi {_greeting(user)},\n\n"
        f"Please confirm whether you will attend {event.title}.\n"
        f"RSVP closes {deadline}.\n\n"
        f"{build_event_url(request, event)}\n\n"
        f"Best,\n"
        f"Ovento"
    )

    _send(f"RSVP reminder: {event.title}", message, [user.email])


def send_announcement_email(users, event, subject, body, request=None):
    """
    Email an organizer announcement to each recipient.
    Uses console backend in prototype mode, so it's safe sync for now.
    """
    event_url = build_event_url(request, event)

    for user in users:
        if not getattr(user, "email", None):
            continue

        message = (
            f"Hi {_greeting(user)},\n\n"
            f"There is a new announcement for the event:\n"
            f"  {event.title}\n\n"
            f"{body}\n\n"
            f"You can view the event here:\n"
            f"{event_url}\n\n"
            f"Best,\n"
            f"Ovento"
        )

        _send(f"[Update] {event.title} - {subject}", message, [user.email])
