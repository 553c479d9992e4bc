from .events import (
    EventListCreateView,
    EventDetailView,
    MyEventsView,
    OrganizerEventsView,
)
from .registrations import (
    RegisterEventView,
    EventRegistrationsView,
    EventRegistrationStatusView,
    MyRegistrationsView,
    EventRegistrationUpdateView,
    BulkRegistrationUpdateView,
    WithdrawRegistrationView,
    CheckInView,
    ConfirmPaymentView,
)
from .teams import TeamViewSet, EventTeamsView, RecommendedTeammatesView
from .chat import EventChatView
from .analytics import EventAnalyticsView
from .rsvps import (
    EventRsvpCreateView,
    MyRsvpView,
    RsvpUpdateView,
    EventRsvpListView,
    RsvpReminderView,
)
from .generics import api_error
