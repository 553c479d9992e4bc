from django.urls import path
from .views import (
    EventListCreateView,
    EventDetailView,
    MyEventsView,
    OrganizerEventsView,
    RegisterEventView,
    EventRegistrationsView,
    EventRegistrationStatusView,
    MyRegistrationsView,
    EventRegistrationUpdateView,
    BulkRegistrationUpdateView,
    WithdrawRegistrationView,
    CheckInView,
    ConfirmPaymentView,
    EventTeamsView,
    RecommendedTeammatesView,
    EventChatView,
    EventAnalyticsView,
    EventRsvpCreateView,
    MyRsvpView,
    RsvpUpdateView,
    EventRsvpListView,
    RsvpReminderView,
)

# Teams API is in urls_teams.py (router based)

urlpatterns = [
    path("events/", EventListCreateView.as_view(), name="event-list-create"),

    # "My" lists (must sit above events/<event_id>/)
    path("events/user/", MyEventsView.as_view(), name="my-events"),
    path("events/organized/", OrganizerEventsView.as_view(), name="organized-events"),

    path("events/<str:event_id>/", EventDetailView.as_view(), name="event-detail"),

    # Registrations
    path("events/<str:event_id>/register/", RegisterEventView.as_view(), name="event-register"),
    path(
        "events/<str:event_id>/registration-status/",
        EventRegistrationStatusView.as_view(),
        name="event-registration-status",
    ),
    path("events/<str:event_id>/registrations/", EventRegistrationsView.as_view(), name="event-registrations"),
    path(
        "events/<str:event_id>/registrations/bulk/",
        BulkRegistrationUpdateView.as_view(),
        name="event-registrations-bulk",
    ),
    path("registrations/me/", MyRegistrationsView.as_view(), name="my-registrations"),
    path("registrations/<str:reg_id>/status/", EventRegistrationUpdateView.as_view(), name="registration-update"),
    path("registrations/<str:reg_id>/withdraw/", WithdrawRegistrationView.as_view(), name="registration-withdraw"),
    path("registrations/<str:reg_id>/checkin/", CheckInView.as_view(), name="registration-checkin"),
    path(
        "registrations/<str:reg_id>/confirm-payment/",
        ConfirmPaymentView.as_view(),
        name="registration-confirm-payment",
    ),

    # Teams + chat
    path("events/<str:event_id>/teams/", EventTeamsView.as_view(), name="event-teams"),
    path(
        "events/<str:event_id>/recommended-teammates/",
        RecommendedTeammatesView.as_view(),
        name="event-recommended-teammates",
    ),
    path("events/<str:event_id>/chat/", EventChatView.as_view(), name="event-chat"),

    # Analytics
    path("events/<str:event_id>/analytics/", EventAnalyticsView.as_view(), name="event-analytics"),

    # RSVP
    path("events/<str:event_id>/rsvp/", EventRsvpCreateView.as_view(), name="event-rsvp"),
    path("events/<str:event_id>/rsvp/me/", MyRsvpView.as_view(), name="event-rsvp-me"),
    path("events/<str:event_id>/rsvp/remind/", RsvpReminderView.as_view(), name="event-rsvp-remind"),
    path("events/<str:event_id>/rsvps/", EventRsvpListView.as_view(), name="event-rsvps"),
    path("rsvp/<str:rsvp_id>/", RsvpUpdateView.as_view(), name="rsvp-update"),
]
