from django.urls import path, include
from core.views import HealthCheckView

urlpatterns = [
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
    path("api/auth/", include("authx.urls")),
    path("api/users/", include("users.urls")),
    # ux first: events/discover|trending|recommended/ must win over events/<event_id>/
    path("api/", include("ux.urls")),
    path("api/", include("events.urls")),
    path("api/", include("events.urls_teams")),
    path("api/", include("notifications.urls")),
    path("api/", include("projects.urls")),
    path("api/", include("core.urls")),
]
