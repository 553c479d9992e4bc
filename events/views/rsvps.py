import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.exceptions import NotFoundError
from events.emails import send_rsvp_reminder_email
from events.serializers import RsvpSerializer
from .generics import api_error, get_event_or_404, user_can_edit_event

logger = logging.getLogger("ovento.events")


class EventRsvpCreateView(APIView):
    """
    POST /api/events/<id>/rsvp/

    Only registered participants can RSVP, once per event.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        reg = storage.find_registration(event.id, request.user.id)
        if reg is None:
            return api_error("You must be registered to RSVP", status.HTTP_403_FORBIDDEN)

        serializer = RsvpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with storage.atomic():
            if storage.get_rsvp_by_user(event.id, request.user.id):
                return api_error("RSVP already exists", status.HTTP_409_CONFLICT)

            rsvp = storage.create_rsvp(dict(
                serializer.validated_data,
                event_id=event.id,
                user_id=request.user.id,
                registration_id=reg.id,
            ))

        return Response(RsvpSerializer(rsvp).data, status=status.HTTP_201_CREATED)


class MyRsvpView(APIView):
    """
    GET /api/events/<id>/rsvp/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        rsvp = request.storage.get_rsvp_by_user(event_id, request.user.id)
        if rsvp is None:
            raise NotFoundError("RSVP not found")
        return Response(RsvpSerializer(rsvp).data)


class RsvpUpdateView(APIView):
    """
    PUT /api/rsvp/<rsvp_id>/   owner only
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, rsvp_id):
        storage = request.storage
        rsvp = storage.get_rsvp(rsvp_id)
        if rsvp is None:
            raise NotFoundError("RSVP not found")

        if rsvp.user_id != request.user.id:
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = RsvpSerializer(rsvp, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        rsvp = storage.update_rsvp(rsvp.id, serializer.validated_data)
        return Response(RsvpSerializer(rsvp).data)


class EventRsvpListView(APIView):
    """
    GET /api/events/<id>/rsvps/   organizer only
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        rsvps = request.storage.get_rsvps_by_event(event.id)
        return Response(RsvpSerializer(rsvps, many=True).data)


class RsvpReminderView(APIView):
    """
    POST /api/events/<id>/rsvp/remind/

    Reminds every pending RSVP not nudged in the last day.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        reminded = []
        for rsvp in storage.get_rsvps_needing_reminder(event.id):
            reminded.append(storage.send_rsvp_reminder(rsvp.id))
            user = storage.get_user(rsvp.user_id)
            if user is None:
                continue
            try:
                send_rsvp_reminder_email(user, event, request=request)
            except Exception as e:
                logger.warning(f"Failed to send RSVP reminder for rsvp {rsvp.id}: {e}")

        return Response({
            "reminded": len(reminded),
            "rsvps": RsvpSerializer(reminded, many=True).data,
        })
