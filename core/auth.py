# core/auth.py
# DRF authentication classes for Ovento.

import logging
from datetime import timedelta

import jwt
from django.apps import apps
from django.conf import settings
from django.utils import timezone
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from core.config import is_prototype_mode

logger = logging.getLogger("ovento")

JWT_ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=12)

DEMO_USER = {
    "id": "mock-user-1",
    "email": "demo@example.com",
    "first_name": "Demo",
    "last_name": "User",
    "profile_image_url": None,
    "skills": ["JavaScript", "React", "Python"],
    "interests": ["Web Development", "AI", "Innovation"],
    "bio": "Prototype mode demo account.",
}


def get_storage():
    # Looked up per call. core.storage imports DRF views, which load this
    # module through DEFAULT_AUTHENTICATION_CLASSES.
    return apps.get_app_config("core").storage


def ensure_demo_user(storage=None):
    storage = storage or get_storage()
    return storage.get_user(DEMO_USER["id"]) or storage.upsert_user(DEMO_USER)


def issue_token(user) -> str:
    """
    Signs an access token for ``user``. Requires AUTH_JWT_SECRET.
    """
    secret = settings.OVENTO["AUTH_JWT_SECRET"]
    if not secret:
        raise AuthenticationFailed("Token signing is not configured")
    now = timezone.now()
    payload = {
        "sub": user.id,
        "email": user.email,
        "iat": int(now.timestamp()),
        "exp": int((now + TOKEN_LIFETIME).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


class BearerTokenAuthentication(BaseAuthentication):
    """
    Validates HS256 bearer tokens.

    1. Extracts the JWT from the Authorization header
    2. Verifies the signature with AUTH_JWT_SECRET
    3. Resolves ``sub`` to a stored user, creating one from the claims
       when the id is unknown
    """

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ", 1)[1]

        secret = settings.OVENTO["AUTH_JWT_SECRET"]
        if not secret:
            logger.warning("AUTH_JWT_SECRET not configured")
            return None

        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid bearer token: {e}")
            raise AuthenticationFailed("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationFailed("Invalid token: missing user ID")

        user = self._get_or_create_user(user_id, payload)
        return (user, payload)

    def _get_or_create_user(self, user_id, payload):
        storage = get_storage()
        user = storage.get_user(user_id)
        if user is None:
            user = storage.upsert_user({
                "id": user_id,
                "email": payload.get("email"),
                "first_name": payload.get("first_name"),
                "last_name": payload.get("last_name"),
            })
            logger.info(f"Created new user from token: {user_id}")
        return user

    def authenticate_header(self, request):
        return "Bearer"


class PrototypeAuthentication(BaseAuthentication):
    """
    Prototype mode only: every request is authenticated.

    ``X-User-Id`` picks a stored user to act as; without it (or with an
    unknown id) the request runs as the demo user.
    """

    def authenticate(self, request):
        if not is_prototype_mode():
            return None

        storage = get_storage()
        requested = request.headers.get("X-User-Id")
        if requested:
            user = storage.get_user(requested)
            if user is not None:
                return (user, None)
            logger.debug(f"Unknown X-User-Id {requested!r}, falling back to demo user")

        return (ensure_demo_user(storage), None)
