from django.test import SimpleTestCase
from rest_framework import status

from core.tests.mixins import StorageTestMixin


class ProfileApiTests(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.make_user("u1", skills=["Python"])
        self.auth(self.user)

    def test_get_me(self):
        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(data["id"], "u1")
        self.assertEqual(data["skills"], ["Python"])

    def test_patch_me_dedupes_skills(self):
        resp = self.client.patch("/api/users/me/", {
            "bio": "Builder",
            "skills": ["Go", " Go ", "Rust", ""],
            "interests": ["", "AI", "AI"],
        })

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        user = self.storage.get_user("u1")
        self.assertEqual(user.skills, ["Go", "Rust"])
        self.assertEqual(user.interests, ["AI"])
        self.assertEqual(user.bio, "Builder")
        self.assertEqual(user.email, "u1@example.com")

    def test_patch_skills_refreshes_recommendations(self):
        organizer = self.make_user("org")
        self.make_event(organizer, tags=["rust"])

        self.client.patch("/api/users/me/", {"skills": ["Rust"]})

        recs = self.storage.get_user_recommendations("u1")
        self.assertEqual(len(recs), 1)

    def test_public_profile(self):
        self.make_user("u2", first_name="Bea")
        resp = self.client.get("/api/users/u2/")
        self.assertEqual(resp.json()["first_name"], "Bea")

    def test_unknown_profile(self):
        resp = self.client.get("/api/users/ghost/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["message"], "User not found")
