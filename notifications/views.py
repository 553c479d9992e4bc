from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.exceptions import NotFoundError
from events.views.generics import api_error
from .serializers import NotificationSerializer


class MyNotificationsView(APIView):
    """
    GET /api/notifications/
    GET /api/notifications/?unread=true
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        unread_only = request.query_params.get("unread")
        unread_only = bool(unread_only and unread_only.lower() in ("1", "true", "yes"))

        notifications = request.storage.get_user_notifications(request.user.id, unread_only=unread_only)
        return Response(NotificationSerializer(notifications, many=True).data)


class MarkNotificationReadView(APIView):
    """
    PUT /api/notifications/<id>/read/
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, notification_id):
        notification = request.storage.get_notification(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")

        if notification.user_id != request.user.id:
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        notification = request.storage.mark_notification_read(notification.id)
        return Response(NotificationSerializer(notification).data)


class MarkAllNotificationsReadView(APIView):
    """
    POST /api/notifications/read-all/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        updated = request.storage.mark_all_notifications_read(request.user.id)
        return Response({"marked_read": updated}, status=status.HTTP_200_OK)
