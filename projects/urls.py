from django.urls import path

from .views import (
    EventSubmissionsView,
    MySubmissionView,
    TeamSubmissionView,
    SubmissionDetailView,
    SubmitProjectView,
    ReviewSubmissionView,
    SubmissionFilesView,
    SubmissionFileDeleteView,
)

urlpatterns = [
    path("events/<str:event_id>/submissions/", EventSubmissionsView.as_view(), name="event-submissions"),
    path("events/<str:event_id>/submissions/me/", MySubmissionView.as_view(), name="my-submission"),
    path(
        "events/<str:event_id>/teams/<str:team_id>/submission/",
        TeamSubmissionView.as_view(),
        name="team-submission",
    ),
    path("submissions/<str:submission_id>/", SubmissionDetailView.as_view(), name="submission-detail"),
    path("submissions/<str:submission_id>/submit/", SubmitProjectView.as_view(), name="submission-submit"),
    path("submissions/<str:submission_id>/review/", ReviewSubmissionView.as_view(), name="submission-review"),
    path("submissions/<str:submission_id>/files/", SubmissionFilesView.as_view(), name="submission-files"),
    path("files/<str:file_id>/", SubmissionFileDeleteView.as_view(), name="submission-file-delete"),
]
