from django.conf import settings
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APIClient

from core.tests.mixins import StorageTestMixin


class SubmissionApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.organizer = self.make_user("org")
        self.leader = self.make_user("leader")
        self.member = self.make_user("member")
        self.outsider = self.make_user("outsider")
        self.event = self.make_event(self.organizer, max_file_size=1, allowed_file_types=["pdf", "png"])
        self.team = self.make_team(self.leader, self.event)
        self.storage.join_team(self.team.id, "member")

    def _create(self, user, **body):
        self.auth(user)
        payload = {"title": "Smart Farm", "team_id": self.team.id}
        payload.update(body)
        return self.client.post(f"/api/events/{self.event.id}/submissions/", payload)

    def test_team_member_creates_draft(self):
        resp = self._create(self.member)

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        data = resp.json()
        self.assertEqual(data["status"], "draft")
        self.assertEqual(data["team_id"], self.team.id)
        self.assertTrue(data["is_public"])

    def test_outsider_cannot_submit_for_team(self):
        resp = self._create(self.outsider)
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_one_submission_per_team(self):
        self._create(self.leader)
        resp = self._create(self.member)
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)

    def test_solo_submission_and_me(self):
        resp = self._create(self.outsider, team_id="")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        resp = self.client.get(f"/api/events/{self.event.id}/submissions/me/")
        self.assertEqual(resp.json()["title"], "Smart Farm")

    def test_update_submit_review_flow(self):
        sub_id = self._create(self.leader).json()["id"]

        self.auth(self.member)
        resp = self.client.put(f"/api/submissions/{sub_id}/", {"repository_url": "https://github.com/x/y"})
        self.assertEqual(resp.json()["repository_url"], "https://github.com/x/y")

        resp = self.client.post(f"/api/submissions/{sub_id}/submit/")
        self.assertEqual(resp.json()["status"], "submitted")
        self.assertIsNotNone(resp.json()["submitted_at"])

        resp = self.client.post(f"/api/submissions/{sub_id}/review/", {"score": 80})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.organizer)
        resp = self.client.post(f"/api/submissions/{sub_id}/review/", {"score": "88.50", "notes": "Solid"})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["status"], "approved")
        self.assertEqual(resp.json()["score"], "88.50")

        # approved is final
        self.auth(self.leader)
        resp = self.client.post(f"/api/submissions/{sub_id}/submit/")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_needs_revision_then_resubmit(self):
        sub_id = self._create(self.leader).json()["id"]
        self.client.post(f"/api/submissions/{sub_id}/submit/")

        self.auth(self.organizer)
        resp = self.client.post(f"/api/submissions/{sub_id}/review/", {"status": "needs_revision"})
        self.assertEqual(resp.json()["status"], "needs_revision")

        self.auth(self.leader)
        resp = self.client.post(f"/api/submissions/{sub_id}/submit/")
        self.assertEqual(resp.json()["status"], "submitted")

    def test_review_draft_is_400(self):
        sub_id = self._create(self.leader).json()["id"]
        self.auth(self.organizer)
        resp = self.client.post(f"/api/submissions/{sub_id}/review/", {})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_outsider_cannot_edit(self):
        sub_id = self._create(self.leader).json()["id"]
        self.auth(self.outsider)
        resp = self.client.put(f"/api/submissions/{sub_id}/", {"title": "Mine now"})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_event_list_visibility(self):
        draft_id = self._create(self.leader).json()["id"]
        submitted_id = self._create(self.outsider, team_id="").json()["id"]
        self.client.post(f"/api/submissions/{submitted_id}/submit/")

        anonymous = APIClient()
        with self.settings(OVENTO=dict(settings.OVENTO, PROTOTYPE_MODE=False)):
            resp = anonymous.get(f"/api/events/{self.event.id}/submissions/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([s["id"] for s in resp.json()], [submitted_id])

        self.auth(self.organizer)
        resp = self.client.get(f"/api/events/{self.event.id}/submissions/")
        self.assertEqual({s["id"] for s in resp.json()}, {draft_id, submitted_id})

    def test_team_submission(self):
        sub_id = self._create(self.leader).json()["id"]
        resp = self.client.get(f"/api/events/{self.event.id}/teams/{self.team.id}/submission/")
        self.assertEqual(resp.json()["id"], sub_id)

    def test_file_upload_limits_and_delete(self):
        sub_id = self._create(self.leader).json()["id"]
        url = f"/api/submissions/{sub_id}/files/"

        bad_type = SimpleUploadedFile("notes.txt", b"x", content_type="text/plain")
        resp = self.client.post(url, {"file": bad_type}, format="multipart")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        too_big = SimpleUploadedFile("deck.pdf", b"x" * (1024 * 1024 + 1), content_type="application/pdf")
        resp = self.client.post(url, {"file": too_big}, format="multipart")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        ok = SimpleUploadedFile("shot.PNG", b"png", content_type="image/png")
        resp = self.client.post(url, {"file": ok}, format="multipart")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        file_id = resp.json()["id"]
        self.assertEqual(resp.json()["file_type"], "image")

        resp = self.client.get(url)
        self.assertEqual([f["original_name"] for f in resp.json()], ["shot.PNG"])

        self.auth(self.outsider)
        self.assertEqual(self.client.delete(f"/api/files/{file_id}/").status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.member)
        self.assertEqual(self.client.delete(f"/api/files/{file_id}/").status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.storage.get_submission_files(sub_id), [])
