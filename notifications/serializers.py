from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    message = serializers.CharField(read_only=True)
    type = serializers.ChoiceField(choices=Notification.TYPE_CHOICES, read_only=True)
    read = serializers.BooleanField(read_only=True)
    data = serializers.DictField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
