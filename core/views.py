import logging

from rest_framework import serializers, status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response

from events.views.generics import api_error
from .config import feature_flags, is_prototype_mode
from .integrations import (
    PROTOTYPE_WARNING,
    UPLOAD_ALLOWED_TYPES,
    UPLOAD_MAX_BYTES,
    create_payment_intent,
    create_subscription,
    store_upload,
)

logger = logging.getLogger("ovento.integrations")


class PaymentIntentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    currency = serializers.CharField(max_length=3, default="inr")
    event_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SubscriptionSerializer(serializers.Serializer):
    price_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# -----------------------------
# HEALTH
# -----------------------------
class HealthCheckView(APIView):
    """
    GET /api/health/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            "status": "ok",
            "mode": "prototype" if is_prototype_mode() else "full",
            "features": feature_flags(),
            "storage": request.storage.counts(),
        })


# -----------------------------
# PAYMENTS (simulated)
# -----------------------------
class PaymentIntentView(APIView):
    """
    POST /api/create-payment-intent/   {"amount": 499, "event_id": "..."}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PaymentIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        intent = create_payment_intent(
            data["amount"],
            currency=data["currency"],
            metadata={"event_id": data.get("event_id"), "user_id": request.user.id},
        )
        return Response({
            "payment_intent_id": intent["id"],
            "client_secret": intent["client_secret"],
            "prototype_mode_warning": PROTOTYPE_WARNING,
        })


class SubscriptionView(APIView):
    """
    POST /api/create-subscription/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SubscriptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        subscription = create_subscription(request.user, serializer.validated_data.get("price_id"))
        request.storage.update_user_stripe_info(
            request.user.id,
            subscription["customer_id"],
            subscription["subscription_id"],
        )
        return Response({
            "subscription_id": subscription["subscription_id"],
            "client_secret": subscription["client_secret"],
            "prototype_mode_warning": PROTOTYPE_WARNING,
        })


# -----------------------------
# UPLOADS (simulated)
# -----------------------------
class UploadView(APIView):
    """
    POST /api/upload/   multipart "file"
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        uploaded = request.FILES.get("file")
        if uploaded is None:
            return api_error("No file uploaded", status.HTTP_400_BAD_REQUEST)

        if uploaded.size > UPLOAD_MAX_BYTES:
            return api_error("File too large (max 10 MB)", status.HTTP_400_BAD_REQUEST)

        if uploaded.content_type not in UPLOAD_ALLOWED_TYPES:
            return api_error("Invalid file type", status.HTTP_400_BAD_REQUEST)

        return Response({
            "url": store_upload(uploaded),
            "filename": uploaded.name,
            "size": uploaded.size,
            "mimetype": uploaded.content_type,
        })
