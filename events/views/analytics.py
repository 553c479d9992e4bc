from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from events.serializers import EventAnalyticSerializer
from .generics import api_error, get_event_or_404, user_can_view_event_analytics


class EventAnalyticsView(APIView):
    """
    GET /api/events/<id>/analytics/?metric=registrations

    Raw metric rows, newest first. Organizer only.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)

        if not user_can_view_event_analytics(request.user, event):
            return api_error("Not allowed", status.HTTP_403_FORBIDDEN)

        metric = request.query_params.get("metric") or None
        rows = request.storage.get_event_analytics(event.id, metric)

        totals = {}
        for row in rows:
            totals[row.metric] = totals.get(row.metric, 0) + row.value

        return Response({
            "event_id": event.id,
            "totals": {k: float(v) for k, v in totals.items()},
            "rows": EventAnalyticSerializer(rows, many=True).data,
        })
