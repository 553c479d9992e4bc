from rest_framework import serializers

from .models import ProjectSubmission


class SubmissionFileSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    submission_id = serializers.CharField(read_only=True)
    filename = serializers.CharField(read_only=True)
    original_name = serializers.CharField(read_only=True)
    mime_type = serializers.CharField(read_only=True)
    size = serializers.IntegerField(read_only=True)
    file_url = serializers.CharField(read_only=True)
    file_type = serializers.CharField(read_only=True)
    uploaded_at = serializers.DateTimeField(read_only=True)


class ProjectSubmissionSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    event_id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    team_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.CharField(read_only=True)
    submitted_at = serializers.DateTimeField(read_only=True)
    reviewed_at = serializers.DateTimeField(read_only=True)
    reviewer_id = serializers.CharField(read_only=True, allow_null=True)
    review_notes = serializers.CharField(read_only=True, allow_null=True)
    score = serializers.DecimalField(max_digits=5, decimal_places=2, read_only=True, allow_null=True)
    repository_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    live_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    video_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    technologies = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    is_public = serializers.BooleanField(required=False)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    files = serializers.SerializerMethodField()

    def get_files(self, obj):
        storage = self.context.get("storage")
        if storage is None:
            return []
        return SubmissionFileSerializer(storage.get_submission_files(obj.id), many=True).data


class SubmissionUpdateSerializer(ProjectSubmissionSerializer):
    """Same fields, but the team cannot be swapped after creation."""
    team_id = serializers.CharField(read_only=True, allow_null=True)
    title = serializers.CharField(max_length=255, required=False)


class ReviewSerializer(serializers.Serializer):
    score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(
        choices=[ProjectSubmission.STATUS_APPROVED, ProjectSubmission.STATUS_NEEDS_REVISION],
        default=ProjectSubmission.STATUS_APPROVED,
    )
