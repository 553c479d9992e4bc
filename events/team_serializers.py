# events/team_serializers.py

from rest_framework import serializers

from users.serializers import UserSummarySerializer


class TeamSerializer(serializers.Serializer):
    """Team with its members and leader resolved from storage."""
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    event_id = serializers.CharField()
    leader_id = serializers.CharField(read_only=True)
    max_members = serializers.IntegerField(required=False, min_value=1, max_value=20)
    skills = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    is_open = serializers.BooleanField(required=False)
    invite_code = serializers.CharField(read_only=True)
    member_ids = serializers.ListField(child=serializers.CharField(), read_only=True)
    current_size = serializers.IntegerField(read_only=True)
    is_full = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    members = serializers.SerializerMethodField()
    leader = serializers.SerializerMethodField()

    def _user(self, user_id):
        storage = self.context.get("storage")
        return storage.get_user(user_id) if storage else None

    def get_members(self, obj):
        users = [self._user(uid) for uid in obj.member_ids]
        return UserSummarySerializer([u for u in users if u], many=True).data

    def get_leader(self, obj):
        leader = self._user(obj.leader_id)
        return UserSummarySerializer(leader).data if leader else None


class PublicTeamSerializer(TeamSerializer):
    """Team as seen by non-members: no invite code."""
    invite_code = None


class TeamJoinSerializer(serializers.Serializer):
    """Join a team with its invite code."""
    invite_code = serializers.CharField(min_length=8, max_length=8)

    def validate_invite_code(self, value):
        return value.strip().upper()


class TeammateQuerySerializer(serializers.Serializer):
    skills = serializers.ListField(child=serializers.CharField(), required=False)
