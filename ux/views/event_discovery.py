# ux/views/event_discovery.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from ux.services.event_discovery import (
    get_discover_events,
    get_recommended_events,
    get_trending_events,
    search_events,
)


def _events_response(events):
    return Response({
        "meta": {"success": True},
        "data": {"events": events},
    })


class UXDiscoverEventsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        events = get_discover_events(
            request.storage,
            type=request.query_params.get("type") or None,
            status=request.query_params.get("status") or None,
        )
        return _events_response(events)


class UXTrendingEventsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return _events_response(get_trending_events(request.storage))


class UXRecommendedEventsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return _events_response(get_recommended_events(request.storage, request.user))


class UXSearchView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return _events_response(search_events(request.storage, request.query_params.get("q")))
