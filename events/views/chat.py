from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from events.serializers import ChatMessageSerializer
from .generics import api_error, get_event_or_404, user_can_access_event_chat


class EventChatView(APIView):
    """
    GET  /api/events/<id>/chat/   newest first, last 50
    POST /api/events/<id>/chat/   {"message": "...", "message_type": "text"}

    Open to the organizer and registered participants.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        if not user_can_access_event_chat(storage, request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        messages = storage.get_event_chat_messages(event.id)
        return Response(ChatMessageSerializer(messages, many=True, context={"storage": storage}).data)

    def post(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        if not user_can_access_event_chat(storage, request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = ChatMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = storage.create_chat_message(
            dict(serializer.validated_data, event_id=event.id, user_id=request.user.id)
        )
        return Response(
            ChatMessageSerializer(message, context={"storage": storage}).data,
            status=status.HTTP_201_CREATED,
        )
