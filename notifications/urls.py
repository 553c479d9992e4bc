from django.urls import path

from .views import MyNotificationsView, MarkNotificationReadView, MarkAllNotificationsReadView

urlpatterns = [
    path("notifications/", MyNotificationsView.as_view(), name="my-notifications"),
    path("notifications/read-all/", MarkAllNotificationsReadView.as_view(), name="notifications-read-all"),
    path(
        "notifications/<str:notification_id>/read/",
        MarkNotificationReadView.as_view(),
        name="notification-read",
    ),
]
