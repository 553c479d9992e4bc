# users/views.py - Profile API

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.exceptions import NotFoundError
from .serializers import UserSerializer, UpdateProfileSerializer


class UserViewSet(viewsets.ViewSet):
    """
    GET   /api/users/me/     current profile
    PATCH /api/users/me/     update names, bio, skills, interests, image
    GET   /api/users/{id}/   public profile
    """
    permission_classes = [IsAuthenticated]

    def retrieve(self, request, pk=None):
        user = request.storage.get_user(pk)
        if user is None:
            raise NotFoundError("User not found")
        return Response(UserSerializer(user).data)

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        if request.method == "GET":
            return Response(UserSerializer(request.user).data)

        serializer = UpdateProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = request.storage.upsert_user(dict(serializer.validated_data, id=request.user.id))

        # Fresh skills can change what we recommend
        if "skills" in serializer.validated_data or "interests" in serializer.validated_data:
            request.storage.generate_recommendations(user.id)

        return Response(UserSerializer(user).data)
