import logging
import os

from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework import status

from core.exceptions import NotFoundError
from core.integrations import store_upload
from events.views.generics import (
    api_error,
    get_event_or_404,
    get_team_or_404,
    user_can_edit_event,
    user_is_team_member,
)
from .models import ProjectSubmission, SubmissionFile
from .serializers import (
    ProjectSubmissionSerializer,
    ReviewSerializer,
    SubmissionFileSerializer,
    SubmissionUpdateSerializer,
)

logger = logging.getLogger("ovento.projects")


def get_submission_or_404(storage, submission_id):
    submission = storage.get_project_submission(submission_id)
    if submission is None:
        raise NotFoundError("Project submission not found")
    return submission


def user_can_manage_submission(storage, user, submission) -> bool:
    """Owner, or any member of the submitting team."""
    if submission.user_id == user.id:
        return True
    if submission.team_id:
        team = storage.get_team(submission.team_id)
        return team is not None and user_is_team_member(user, team)
    return False


def _serialize(storage, submission):
    return ProjectSubmissionSerializer(submission, context={"storage": storage}).data


class EventSubmissionsView(APIView):
    """
    GET  /api/events/<id>/submissions/   public + submitted only, organizer sees all
    POST /api/events/<id>/submissions/   create a draft (team_id optional)
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        submissions = storage.get_event_submissions(event.id)
        if not user_can_edit_event(request.user, event):
            submissions = [
                s for s in submissions
                if s.is_public and s.status == ProjectSubmission.STATUS_SUBMITTED
            ]

        serializer = ProjectSubmissionSerializer(submissions, many=True, context={"storage": storage})
        return Response(serializer.data)

    def post(self, request, event_id):
        storage = request.storage
        event = get_event_or_404(storage, event_id)

        serializer = ProjectSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team_id = serializer.validated_data.pop("team_id", None) or None

        if team_id:
            team = get_team_or_404(storage, team_id)
            if team.event_id != event.id or not user_is_team_member(request.user, team):
                return api_error("You are not a member of this team", status.HTTP_403_FORBIDDEN)
            existing = storage.get_team_submission(event.id, team_id)
        else:
            existing = storage.get_user_submission(event.id, request.user.id)

        if existing:
            return Response(
                {"message": "Submission already exists", "submission_id": existing.id},
                status=status.HTTP_409_CONFLICT,
            )

        submission = storage.create_project_submission(dict(
            serializer.validated_data,
            event_id=event.id,
            user_id=request.user.id,
            team_id=team_id,
        ))
        return Response(_serialize(storage, submission), status=status.HTTP_201_CREATED)


class MySubmissionView(APIView):
    """
    GET /api/events/<id>/submissions/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        submission = request.storage.get_user_submission(event_id, request.user.id)
        if submission is None:
            raise NotFoundError("Project submission not found")
        return Response(_serialize(request.storage, submission))


class TeamSubmissionView(APIView):
    """
    GET /api/events/<id>/teams/<team_id>/submission/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id, team_id):
        submission = request.storage.get_team_submission(event_id, team_id)
        if submission is None:
            raise NotFoundError("Project submission not found")
        return Response(_serialize(request.storage, submission))


class SubmissionDetailView(APIView):
    """
    GET /api/submissions/<id>/
    PUT /api/submissions/<id>/   owner or team member
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, submission_id):
        submission = get_submission_or_404(request.storage, submission_id)
        return Response(_serialize(request.storage, submission))

    def put(self, request, submission_id):
        storage = request.storage
        submission = get_submission_or_404(storage, submission_id)

        if not user_can_manage_submission(storage, request.user, submission):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = SubmissionUpdateSerializer(submission, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        submission = storage.update_project_submission(submission.id, serializer.validated_data)
        return Response(_serialize(storage, submission))


class SubmitProjectView(APIView):
    """
    POST /api/submissions/<id>/submit/

    Invalid lifecycle moves surface as 400 through the exception handler.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, submission_id):
        storage = request.storage
        submission = get_submission_or_404(storage, submission_id)

        if not user_can_manage_submission(storage, request.user, submission):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        event = storage.get_event(submission.event_id)
        if event is not None and event.project_submission_deadline:
            if timezone.now() > event.project_submission_deadline:
                return api_error("Submission deadline has passed", status.HTTP_400_BAD_REQUEST)

        submission = storage.submit_project(submission.id, actor_id=request.user.id)
        return Response(_serialize(storage, submission))


class ReviewSubmissionView(APIView):
    """
    POST /api/submissions/<id>/review/
    Body: { "score": 87.5, "notes": "...", "status": "approved" | "needs_revision" }
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, submission_id):
        storage = request.storage
        submission = get_submission_or_404(storage, submission_id)
        event = get_event_or_404(storage, submission.event_id)

        if not user_can_edit_event(request.user, event):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = storage.review_submission(
            submission.id,
            request.user.id,
            score=serializer.validated_data.get("score"),
            notes=serializer.validated_data.get("notes"),
            status=serializer.validated_data["status"],
        )
        return Response(_serialize(storage, submission))


class SubmissionFilesView(APIView):
    """
    GET  /api/submissions/<id>/files/
    POST /api/submissions/<id>/files/   multipart "file"

    Uploads are checked against the event's size (MB) and extension limits.
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def get(self, request, submission_id):
        submission = get_submission_or_404(request.storage, submission_id)
        files = request.storage.get_submission_files(submission.id)
        return Response(SubmissionFileSerializer(files, many=True).data)

    def post(self, request, submission_id):
        storage = request.storage
        submission = get_submission_or_404(storage, submission_id)

        if not user_can_manage_submission(storage, request.user, submission):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        uploaded = request.FILES.get("file")
        if uploaded is None:
            return api_error("No file uploaded", status.HTTP_400_BAD_REQUEST)

        event = get_event_or_404(storage, submission.event_id)
        if uploaded.size > event.max_file_size * 1024 * 1024:
            return api_error(f"File exceeds {event.max_file_size} MB limit", status.HTTP_400_BAD_REQUEST)

        extension = os.path.splitext(uploaded.name)[1].lower().lstrip(".")
        if event.allowed_file_types and extension not in event.allowed_file_types:
            return api_error(f"File type '{extension or 'unknown'}' is not allowed", status.HTTP_400_BAD_REQUEST)

        file_url = store_upload(uploaded)
        mime_type = uploaded.content_type or "application/octet-stream"
        submission_file = storage.create_submission_file({
            "submission_id": submission.id,
            "filename": file_url.rsplit("/", 1)[-1],
            "original_name": uploaded.name,
            "mime_type": mime_type,
            "size": uploaded.size,
            "file_url": file_url,
            "file_type": SubmissionFile.type_for_mime(mime_type),
        })
        return Response(SubmissionFileSerializer(submission_file).data, status=status.HTTP_201_CREATED)


class SubmissionFileDeleteView(APIView):
    """
    DELETE /api/files/<id>/   owner or team member
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, file_id):
        storage = request.storage
        submission_file = storage.get_submission_file(file_id)
        if submission_file is None:
            raise NotFoundError("File not found")

        submission = get_submission_or_404(storage, submission_file.submission_id)
        if not user_can_manage_submission(storage, request.user, submission):
            return api_error("Access denied", status.HTTP_403_FORBIDDEN)

        storage.delete_submission_file(submission_file.id)
        logger.info(f"Submission file deleted: id={file_id}, by={request.user.id}")
        return Response(status=status.HTTP_204_NO_CONTENT)
