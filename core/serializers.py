from rest_framework import serializers

from .models import AIRecommendation


class AIRecommendationSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    type = serializers.ChoiceField(choices=AIRecommendation.TYPE_CHOICES, read_only=True)
    entity_id = serializers.CharField(read_only=True)
    score = serializers.DecimalField(max_digits=4, decimal_places=2, read_only=True)
    reason = serializers.CharField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
