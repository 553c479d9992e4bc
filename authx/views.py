import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from core.auth import ensure_demo_user, issue_token
from core.config import is_prototype_mode
from events.views.generics import api_error
from users.serializers import UserSerializer
from .serializers import LoginSerializer

logger = logging.getLogger("ovento")


class CurrentUserView(APIView):
    """
    GET /api/auth/user/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class LoginView(APIView):
    """
    POST /api/auth/login/   {"user_id": "..."}   (optional)

    Only available in prototype mode. Returns a signed token when
    AUTH_JWT_SECRET is configured, otherwise just the user.
    """
    # allow unauthenticated
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        if not is_prototype_mode():
            return api_error("Prototype login is disabled", status.HTTP_404_NOT_FOUND)

        serializer = LoginSerializer(data=request.data, context={"storage": request.storage})
        serializer.is_valid(raise_exception=True)

        user_id = serializer.validated_data.get("user_id")
        user = request.storage.get_user(user_id) if user_id else ensure_demo_user(request.storage)

        payload = {
            "user": UserSerializer(user).data,
            "prototype_mode": True,
        }
        try:
            payload["access"] = issue_token(user)
        except AuthenticationFailed as e:
            # no signing secret: clients fall back to the X-User-Id header
            logger.debug(f"Login without token for {user.id}: {e}")

        logger.info(f"Prototype login: user={user.id}")
        return Response(payload, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """
    POST /api/auth/logout/

    Tokens are stateless; the client drops its copy.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        if request.user is not None:
            logger.info(f"Logout: user={request.user.id}")
        return Response({"message": "Logged out"}, status=status.HTTP_200_OK)
