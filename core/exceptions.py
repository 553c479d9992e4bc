from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("ovento")


# -----------------------------
# Storage errors
# -----------------------------
class StorageError(Exception):
    """Base class for every error raised by MemoryStorage."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Storage operation failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(StorageError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AccessDeniedError(StorageError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Event not found or access denied"


class InvalidInviteCodeError(StorageError):
    default_message = "Invalid invite code"


class TeamFullError(StorageError):
    default_message = "Team is full"


class AlreadyMemberError(StorageError):
    default_message = "User is already a member"


class TeamClosedError(StorageError):
    default_message = "Team is not accepting new members"


class NotTeamMemberError(StorageError):
    default_message = "User is not a member of this team"


class LeaderCannotLeaveError(StorageError):
    default_message = "Team leaders cannot leave. Transfer leadership or delete the team."


class InvalidTransitionError(StorageError):
    default_message = "Invalid status transition"


# -----------------------------
# DRF exception handler
# -----------------------------
def _error_response(status_code, message, errors):
    return Response(
        {
            "success": False,
            "status_code": status_code,
            "message": message,
            "errors": errors,
        },
        status=status_code,
    )


def custom_exception_handler(exc, context):
    """
    Wrap DRF, Django and storage exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    if isinstance(exc, StorageError):
        return _error_response(exc.status_code, exc.message, {"detail": exc.message})

    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        data = response.data
        if isinstance(data, dict) and "detail" in data:
            message = str(data["detail"])
        else:
            message = "Invalid request"
        return _error_response(response.status_code, message, data)

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error.",
        {"detail": "Internal server error."},
    )
