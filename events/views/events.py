import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework import status

from events.serializers import EventSerializer, EventCardSerializer
from .generics import api_error, get_event_or_404, user_can_edit_event

logger = logging.getLogger("ovento.events")


class PublicReadMixin:
    """GET is open to everyone, anything else needs a user."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]


class EventListCreateView(PublicReadMixin, APIView):
    """
    GET  /api/events/?type=&status=&search=
    POST /api/events/
    """

    def get(self, request):
        events = request.storage.get_events(
            type=request.query_params.get("type") or None,
            status=request.query_params.get("status") or None,
            search=request.query_params.get("search") or None,
        )
        serializer = EventCardSerializer(events, many=True, context={"storage": request.storage})
        return Response(serializer.data)

    def post(self, request):
        serializer = EventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = request.storage.create_event(
            dict(serializer.validated_data, organizer_id=request.user.id)
        )
        request.storage.record_event_metric(event.id, "created", 1)

        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(PublicReadMixin, APIView):
    """
    GET          /api/events/<id>/
    PUT / PATCH  /api/events/<id>/   organizer only
    DELETE       /api/events/<id>/   organizer only
    """

    def get(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)
        serializer = EventCardSerializer(event, context={"storage": request.storage})
        return Response(serializer.data)

    def put(self, request, event_id):
        return self._update(request, event_id)

    def patch(self, request, event_id):
        return self._update(request, event_id)

    def _update(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)
        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = EventSerializer(event, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        event = request.storage.update_event(event_id, serializer.validated_data)
        logger.info(f"Event updated: id={event_id}, by={request.user.id}, fields={sorted(serializer.validated_data)}")
        return Response(EventSerializer(event).data)

    def delete(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)
        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        request.storage.delete_event(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyEventsView(APIView):
    """
    GET /api/events/user/

    Events the user registered for plus the ones they organize,
    each listed once.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        storage = request.storage
        registered = storage.get_user_events(request.user.id)
        organized = storage.get_events_by_organizer(request.user.id)

        seen = set()
        events = []
        for event in registered + organized:
            if event.id not in seen:
                seen.add(event.id)
                events.append(event)
        events.sort(key=lambda e: e.start_date, reverse=True)

        serializer = EventCardSerializer(events, many=True, context={"storage": storage})
        return Response(serializer.data)


class OrganizerEventsView(APIView):
    """
    GET /api/events/organized/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        events = request.storage.get_events_by_organizer(request.user.id)
        serializer = EventCardSerializer(events, many=True, context={"storage": request.storage})
        return Response(serializer.data)
