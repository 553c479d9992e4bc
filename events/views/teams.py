# events/views/teams.py - Team Formation API Views

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated, AllowAny

from core.exceptions import StorageError
from events.serializers import ChatMessageSerializer
from events.team_serializers import (
    PublicTeamSerializer,
    TeamJoinSerializer,
    TeamSerializer,
)
from notifications.models import Notification
from users.serializers import UserSummarySerializer
from .generics import (
    api_error,
    get_event_or_404,
    get_team_or_404,
    user_is_team_member,
)

logger = logging.getLogger("ovento.events")


class TeamViewSet(viewsets.ViewSet):
    """
    API for creating and managing event teams

    POST /api/teams/                        create (caller becomes leader)
    GET  /api/teams/{id}/                   detail
    POST /api/teams/{id}/join/              join an open team
    POST /api/teams/join-by-invite/         join with an invite code
    POST /api/teams/{id}/leave/             leave (leaders cannot leave)
    GET|POST /api/teams/{id}/chat/          team chat, members only
    """
    permission_classes = [IsAuthenticated]

    def _serialize(self, request, team):
        serializer_class = TeamSerializer if user_is_team_member(request.user, team) else PublicTeamSerializer
        return serializer_class(team, context={"storage": request.storage}).data

    def create(self, request):
        serializer = TeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        get_event_or_404(request.storage, serializer.validated_data["event_id"])
        team = request.storage.create_team(
            dict(serializer.validated_data, leader_id=request.user.id)
        )

        return Response(self._serialize(request, team), status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        team = get_team_or_404(request.storage, pk)
        return Response(self._serialize(request, team))

    @action(detail=True, methods=["post"], url_path="join")
    def join(self, request, pk=None):
        was_member = user_is_team_member(request.user, get_team_or_404(request.storage, pk))
        try:
            team = request.storage.join_team(pk, request.user.id)
        except StorageError as e:
            if e.status_code == status.HTTP_404_NOT_FOUND:
                raise
            return api_error(e.message, status.HTTP_400_BAD_REQUEST)

        if was_member:
            return Response({
                "message": "Already a member",
                "team": self._serialize(request, team),
            })

        self._notify_leader(request, team)
        return Response({
            "message": "Joined team successfully",
            "team": self._serialize(request, team),
        })

    @action(detail=False, methods=["post"], url_path="join-by-invite")
    def join_by_invite(self, request):
        """
        Join a team via invite code

        POST /api/teams/join-by-invite/
        Body: {"invite_code": "ABCD1234"}
        """
        serializer = TeamJoinSerializer(data=request.data)
        if not serializer.is_valid():
            return api_error("Invalid invite code", status.HTTP_400_BAD_REQUEST)

        try:
            team = request.storage.join_team_by_invite_code(
                serializer.validated_data["invite_code"], request.user.id
            )
        except StorageError as e:
            return api_error(e.message, status.HTTP_400_BAD_REQUEST)

        self._notify_leader(request, team)
        return Response({
            "message": "Joined team successfully",
            "team": self._serialize(request, team),
        })

    @action(detail=True, methods=["post"], url_path="leave")
    def leave(self, request, pk=None):
        """Leave a team (members only, leaders cannot leave)"""
        try:
            request.storage.leave_team(pk, request.user.id)
        except StorageError as e:
            if e.status_code == status.HTTP_404_NOT_FOUND:
                raise
            return api_error(e.message, status.HTTP_400_BAD_REQUEST)

        return Response({"message": "Left team successfully"})

    @action(detail=True, methods=["get", "post"], url_path="chat")
    def chat(self, request, pk=None):
        storage = request.storage
        team = get_team_or_404(storage, pk)

        if not user_is_team_member(request.user, team):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        context = {"storage": storage}
        if request.method == "GET":
            messages = storage.get_team_chat_messages(team.id)
            return Response(ChatMessageSerializer(messages, many=True, context=context).data)

        serializer = ChatMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = storage.create_chat_message(
            dict(serializer.validated_data, team_id=team.id, user_id=request.user.id)
        )
        return Response(ChatMessageSerializer(message, context=context).data, status=status.HTTP_201_CREATED)

    def _notify_leader(self, request, team):
        if team.leader_id == request.user.id:
            return
        request.storage.create_notification({
            "user_id": team.leader_id,
            "title": "New team member",
            "message": f"{request.user.full_name or request.user.id} joined {team.name}.",
            "type": Notification.TYPE_TEAM_JOINED,
            "data": {"team_id": team.id, "event_id": team.event_id, "user_id": request.user.id},
        })


class EventTeamsView(APIView):
    """
    GET /api/events/<id>/teams/   public, sorted by name
    """
    permission_classes = [AllowAny]

    def get(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)
        teams = request.storage.get_event_teams(event.id)
        serializer = PublicTeamSerializer(teams, many=True, context={"storage": request.storage})
        return Response(serializer.data)


class RecommendedTeammatesView(APIView):
    """
    GET /api/events/<id>/recommended-teammates/?skills=Python,React

    Without ?skills the caller's own profile skills are used.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        get_event_or_404(request.storage, event_id)

        raw = request.query_params.get("skills")
        if raw is not None:
            skills = [s.strip() for s in raw.split(",") if s.strip()]
        else:
            skills = request.user.skills or []

        users = request.storage.find_teammates(request.user.id, skills)
        return Response(UserSummarySerializer(users, many=True).data)
