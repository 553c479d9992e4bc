import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from events.emails import send_registration_email
from events.models import EventRegistration
from events.serializers import (
    BulkRegistrationUpdateSerializer,
    ConfirmPaymentSerializer,
    RegisterSerializer,
    RegistrationSerializer,
    RegistrationStatusSerializer,
    RegistrationWithUserSerializer,
    WithdrawSerializer,
)
from notifications.models import Notification
from .generics import (
    api_error,
    get_event_or_404,
    get_registration_or_404,
    get_team_or_404,
    user_can_edit_event,
    user_is_team_member,
)

logger = logging.getLogger("ovento.events")


class RegisterEventView(APIView):
    """
    POST /api/events/<id>/register/   {"team_id": "..."}  (optional)
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        storage = request.storage
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team_id = serializer.validated_data.get("team_id") or None

        # Duplicate check, capacity check and insert must not interleave
        with storage.atomic():
            event = get_event_or_404(storage, event_id)

            existing = storage.find_registration(event.id, request.user.id)
            if existing:
                return Response(
                    {"registered": True, "registration_id": existing.id, "message": "Already registered"},
                    status=status.HTTP_409_CONFLICT,
                )

            if event.max_participants:
                spots_left = event.max_participants - storage.get_registration_count(event.id)
                if spots_left <= 0:
                    logger.warning(f"Registration failed: capacity exceeded for event {event_id}")
                    return api_error("Event is full", status.HTTP_400_BAD_REQUEST)

            if team_id:
                team = get_team_or_404(storage, team_id)
                if team.event_id != event.id or not user_is_team_member(request.user, team):
                    return api_error("You are not a member of this team", status.HTTP_400_BAD_REQUEST)

            reg = storage.register_for_event(event.id, request.user.id, team_id)

        storage.record_event_metric(event.id, "registrations", 1)
        storage.create_notification({
            "user_id": request.user.id,
            "title": "Registration Confirmed",
            "message": f"You're all set for {event.title}!",
            "type": Notification.TYPE_REGISTRATION_CONFIRMED,
            "data": {"event_id": event.id, "registration_id": reg.id},
        })

        # Send email (non-critical)
        try:
            send_registration_email(request.user, event, request=request)
        except Exception as e:
            logger.warning(f"Failed to send registration email for reg {reg.id}: {e}")

        return Response(RegistrationSerializer(reg).data, status=status.HTTP_201_CREATED)


class EventRegistrationsView(APIView):
    """
    GET /api/events/<id>/registrations/   organizer only
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        event = get_event_or_404(request.storage, event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        regs = request.storage.get_event_registrations(event.id)
        serializer = RegistrationWithUserSerializer(regs, many=True, context={"storage": request.storage})
        return Response(serializer.data)


class EventRegistrationStatusView(APIView):
    """
    GET /api/events/<id>/registration-status/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        reg = request.storage.find_registration(event_id, request.user.id)

        if not reg:
            return Response({"is_registered": False}, status=200)

        return Response({
            "is_registered": True,
            "registration": RegistrationSerializer(reg).data,
        }, status=200)


class MyRegistrationsView(APIView):
    """
    GET /api/registrations/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        regs = request.storage.get_user_registrations(request.user.id)
        return Response(RegistrationSerializer(regs, many=True).data)


class EventRegistrationUpdateView(APIView):
    """
    PUT /api/registrations/<reg_id>/status/
    Body: { "status": "accepted" | "rejected" | "waitlist" | ..., "organizer_notes": "..." }
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, reg_id):
        storage = request.storage
        reg = get_registration_or_404(storage, reg_id)
        event = get_event_or_404(storage, reg.event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = RegistrationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reg = storage.update_registration_status(
            reg.id,
            serializer.validated_data["status"],
            serializer.validated_data.get("organizer_notes"),
        )
        return Response(RegistrationSerializer(reg).data)


class BulkRegistrationUpdateView(APIView):
    """
    PUT /api/events/<id>/registrations/bulk/
    Body: { "registration_ids": [...], "status": "...", "organizer_notes": "..." }

    Ids that do not belong to the event are skipped.
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = BulkRegistrationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        own_ids = {r.id for r in storage.get_event_registrations(event.id)}
        ids = [rid for rid in serializer.validated_data["registration_ids"] if rid in own_ids]

        updated = storage.bulk_update_registrations(
            ids,
            serializer.validated_data["status"],
            serializer.validated_data.get("organizer_notes"),
        )
        return Response({
            "updated": len(updated),
            "registrations": RegistrationSerializer(updated, many=True).data,
        })


class WithdrawRegistrationView(APIView):
    """
    POST /api/registrations/<reg_id>/withdraw/   {"reason": "..."}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, reg_id):
        storage = request.storage
        reg = get_registration_or_404(storage, reg_id)

        if reg.user_id != request.user.id:
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        if reg.status == EventRegistration.STATUS_WITHDRAWN:
            return api_error("Registration already withdrawn", status.HTTP_400_BAD_REQUEST)

        event = storage.get_event(reg.event_id)
        if event is not None and not event.allow_withdrawal:
            return api_error("Withdrawal is not allowed for this event", status.HTTP_400_BAD_REQUEST)

        serializer = WithdrawSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reg = storage.withdraw_from_event(reg.id, serializer.validated_data.get("reason"))
        logger.info(f"Registration withdrawn: reg={reg.id}, user={request.user.id}")
        return Response(RegistrationSerializer(reg).data)


class CheckInView(APIView):
    """
    POST /api/registrations/<reg_id>/checkin/   organizer only
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, reg_id):
        storage = request.storage
        reg = get_registration_or_404(storage, reg_id)
        event = get_event_or_404(storage, reg.event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        if reg.status == EventRegistration.STATUS_WITHDRAWN:
            return api_error("Cannot check in a withdrawn registration", status.HTTP_400_BAD_REQUEST)

        if reg.checked_in_at:
            return Response(
                {"message": "Already checked in", "registration": RegistrationSerializer(reg).data},
                status=status.HTTP_409_CONFLICT,
            )

        reg = storage.check_in_participant(reg.id)
        return Response(RegistrationSerializer(reg).data)


class ConfirmPaymentView(APIView):
    """
    POST /api/registrations/<reg_id>/confirm-payment/
    Body: { "payment_intent_id": "pi_...", "payment_status": "completed" }

    Payments are simulated: the client reports the outcome.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, reg_id):
        storage = request.storage
        reg = get_registration_or_404(storage, reg_id)

        if reg.user_id != request.user.id:
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reg = storage.update_registration_payment_status(
            reg.id,
            serializer.validated_data["payment_status"],
            serializer.validated_data["payment_intent_id"],
        )
        return Response(RegistrationSerializer(reg).data)
