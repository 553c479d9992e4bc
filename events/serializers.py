from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import ChatMessage, Event, EventRegistration, EventRsvp


class EventSerializer(serializers.Serializer):
    """
    Read + write shape of an event. organizer_id always comes from the
    authenticated user, never from the payload.
    """
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    type = serializers.ChoiceField(choices=Event.TYPE_CHOICES)
    status = serializers.ChoiceField(choices=Event.STATUS_CHOICES, required=False)
    organizer_id = serializers.CharField(read_only=True)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    is_virtual = serializers.BooleanField(required=False)
    max_participants = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    registration_fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    prize_pool = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    requirements = serializers.ListField(child=serializers.CharField(max_length=255), required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    image_url = serializers.CharField(max_length=1024, required=False, allow_blank=True, allow_null=True)

    rsvp_deadline = serializers.DateTimeField(required=False, allow_null=True)
    project_submission_deadline = serializers.DateTimeField(required=False, allow_null=True)
    allow_withdrawal = serializers.BooleanField(required=False)
    require_project_submission = serializers.BooleanField(required=False)
    project_submission_instructions = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    max_file_size = serializers.IntegerField(required=False, min_value=1, max_value=100)
    allowed_file_types = serializers.ListField(child=serializers.CharField(max_length=10), required=False)

    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    def validate_allowed_file_types(self, value):
        return [v.lower().lstrip(".") for v in value]

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs


class EventCardSerializer(EventSerializer):
    """Event plus its live registration count (discovery / search lists)."""
    registrations_count = serializers.SerializerMethodField()

    def get_registrations_count(self, obj):
        storage = self.context.get("storage")
        return storage.get_registration_count(obj.id) if storage else None


class RegistrationSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    event_id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    team_id = serializers.CharField(read_only=True, allow_null=True)
    status = serializers.CharField(read_only=True)
    payment_status = serializers.CharField(read_only=True)
    payment_intent_id = serializers.CharField(read_only=True, allow_null=True)
    checked_in_at = serializers.DateTimeField(read_only=True)
    withdrawn_at = serializers.DateTimeField(read_only=True)
    withdrawal_reason = serializers.CharField(read_only=True, allow_null=True)
    organizer_notes = serializers.CharField(read_only=True, allow_null=True)
    registered_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class RegistrationWithUserSerializer(RegistrationSerializer):
    """Organizer view of a registrant."""
    user = serializers.SerializerMethodField()

    def get_user(self, obj):
        user = self.context["storage"].get_user(obj.user_id)
        return UserSummarySerializer(user).data if user else None


class RegisterSerializer(serializers.Serializer):
    team_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class RegistrationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=EventRegistration.STATUS_CHOICES)
    organizer_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BulkRegistrationUpdateSerializer(RegistrationStatusSerializer):
    registration_ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)


class WithdrawSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class ConfirmPaymentSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)
    payment_status = serializers.ChoiceField(
        choices=EventRegistration.PAYMENT_STATUS_CHOICES,
        default=EventRegistration.PAYMENT_COMPLETED,
    )


class ChatMessageSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    event_id = serializers.CharField(read_only=True, allow_null=True)
    team_id = serializers.CharField(read_only=True, allow_null=True)
    user_id = serializers.CharField(read_only=True)
    message = serializers.CharField(max_length=2000)
    message_type = serializers.ChoiceField(choices=ChatMessage.TYPE_CHOICES, default=ChatMessage.TYPE_TEXT)
    file_url = serializers.CharField(max_length=1024, required=False, allow_blank=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    user = serializers.SerializerMethodField()

    def validate_message(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty.")
        return value

    def get_user(self, obj):
        storage = self.context.get("storage")
        user = storage.get_user(obj.user_id) if storage else None
        return UserSummarySerializer(user).data if user else None


class EventAnalyticSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    event_id = serializers.CharField(read_only=True)
    metric = serializers.CharField(read_only=True)
    value = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    date = serializers.DateTimeField(read_only=True)


class RsvpSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    event_id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    registration_id = serializers.CharField(read_only=True)
    status = serializers.ChoiceField(choices=EventRsvp.STATUS_CHOICES, required=False)
    responded_at = serializers.DateTimeField(read_only=True)
    reminders_sent = serializers.IntegerField(read_only=True)
    last_reminder_at = serializers.DateTimeField(read_only=True)
    dietary_restrictions = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    accessibility_needs = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    emergency_contact = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
