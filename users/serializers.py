from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True, allow_null=True)
    first_name = serializers.CharField(read_only=True, allow_null=True)
    last_name = serializers.CharField(read_only=True, allow_null=True)
    full_name = serializers.CharField(read_only=True)
    profile_image_url = serializers.CharField(read_only=True, allow_null=True)
    skills = serializers.ListField(child=serializers.CharField(), read_only=True)
    interests = serializers.ListField(child=serializers.CharField(), read_only=True)
    bio = serializers.CharField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class UserSummarySerializer(serializers.Serializer):
    """Small embedded form used inside team / chat / participant payloads."""
    id = serializers.CharField(read_only=True)
    first_name = serializers.CharField(read_only=True, allow_null=True)
    last_name = serializers.CharField(read_only=True, allow_null=True)
    profile_image_url = serializers.CharField(read_only=True, allow_null=True)
    skills = serializers.ListField(child=serializers.CharField(), read_only=True)


class UpdateProfileSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    profile_image_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    skills = serializers.ListField(child=serializers.CharField(max_length=100, allow_blank=True), required=False)
    interests = serializers.ListField(child=serializers.CharField(max_length=100, allow_blank=True), required=False)

    def validate_skills(self, value):
        # keep order, drop duplicates and blanks
        seen = []
        for skill in (v.strip() for v in value):
            if skill and skill not in seen:
                seen.append(skill)
        return seen

    validate_interests = validate_skills
