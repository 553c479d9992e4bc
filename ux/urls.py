from django.urls import path
from ux.views.dashboard import UXDashboardStatsView
from ux.views.event_discovery import (
    UXDiscoverEventsView,
    UXTrendingEventsView,
    UXRecommendedEventsView,
    UXSearchView,
)
from ux.views.organizer import (
    UXOrganizerEventStatsView,
    UXOrganizerParticipantsView,
    UXOrganizerAnnounceView,
)
from ux.views.ai import UXRecommendationsView, UXGenerateRecommendationsView

urlpatterns = [
    path("events/discover/", UXDiscoverEventsView.as_view(), name="ux-events-discover"),
    path("events/trending/", UXTrendingEventsView.as_view(), name="ux-events-trending"),
    path("events/recommended/", UXRecommendedEventsView.as_view(), name="ux-events-recommended"),
    path("search/", UXSearchView.as_view(), name="ux-search"),
    path("dashboard/stats/", UXDashboardStatsView.as_view(), name="ux-dashboard-stats"),
    path(
        "events/<str:event_id>/dashboard/stats/",
        UXOrganizerEventStatsView.as_view(),
        name="ux-organizer-event-stats",
    ),
    path(
        "events/<str:event_id>/dashboard/participants/",
        UXOrganizerParticipantsView.as_view(),
        name="ux-organizer-participants",
    ),
    path(
        "events/<str:event_id>/dashboard/announce/",
        UXOrganizerAnnounceView.as_view(),
        name="ux-organizer-announce",
    ),
    path("ai/recommendations/", UXRecommendationsView.as_view(), name="ux-ai-recommendations"),
    path("ai/generate-recommendations/", UXGenerateRecommendationsView.as_view(), name="ux-ai-generate"),
]
