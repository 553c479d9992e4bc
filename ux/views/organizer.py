from rest_framework import serializers, status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from events.views.generics import get_event_or_404
from ux.services.organizer import get_event_participants, get_event_stats, send_announcement


class AnnouncementSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=255)
    message = serializers.CharField(max_length=5000)
    recipient_type = serializers.ChoiceField(choices=["all", "accepted", "pending"], default="all")


class UXOrganizerEventStatsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        get_event_or_404(request.storage, event_id)
        stats = get_event_stats(request.storage, event_id, request.user)
        return Response({
            "meta": {"success": True},
            "data": {"stats": stats},
        })


class UXOrganizerParticipantsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        get_event_or_404(request.storage, event_id)
        participants = get_event_participants(request.storage, event_id, request.user)
        return Response({
            "meta": {"success": True},
            "data": {"participants": participants},
        })


class UXOrganizerAnnounceView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        get_event_or_404(request.storage, event_id)

        serializer = AnnouncementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sent = send_announcement(
            request.storage,
            event_id,
            request.user,
            serializer.validated_data["subject"],
            serializer.validated_data["message"],
            serializer.validated_data["recipient_type"],
            request=request,
        )
        return Response({
            "meta": {"success": True},
            "data": {"recipients": sent},
        }, status=status.HTTP_201_CREATED)
