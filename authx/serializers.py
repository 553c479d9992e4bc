from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """
    Prototype login: pick a stored user by id (defaults to the demo user).
    """
    user_id = serializers.CharField(required=False, allow_blank=True)

    def validate_user_id(self, value):
        storage = self.context["storage"]
        if value and storage.get_user(value) is None:
            raise serializers.ValidationError("Unknown user")
        return value
