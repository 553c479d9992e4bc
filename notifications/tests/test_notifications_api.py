from django.test import SimpleTestCase
from rest_framework import status

from core.tests.mixins import StorageTestMixin
from notifications.models import Notification


class NotificationApiTestCase(StorageTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.make_user("noti_user")
        self.other = self.make_user("other")

        self.system = self.storage.create_notification({
            "user_id": self.user.id,
            "title": "System notice",
            "message": "Welcome",
            "type": Notification.TYPE_SYSTEM,
        })
        self.storage.create_notification({
            "user_id": self.user.id,
            "title": "Event update",
            "message": "Details",
            "type": Notification.TYPE_EVENT_ANNOUNCEMENT,
        })
        self.foreign = self.storage.create_notification({
            "user_id": self.other.id,
            "title": "Other user",
            "message": "Should not be seen",
        })

    def test_list_all_notifications_for_me(self):
        self.auth(self.user)
        resp = self.client.get("/api/notifications/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        titles = {n["title"] for n in resp.json()}
        self.assertEqual(titles, {"System notice", "Event update"})

    def test_unread_filter(self):
        self.storage.mark_notification_read(self.system.id)

        self.auth(self.user)
        resp = self.client.get("/api/notifications/?unread=true")
        self.assertEqual([n["title"] for n in resp.json()], ["Event update"])

    def test_mark_one_read(self):
        self.auth(self.user)
        resp = self.client.put(f"/api/notifications/{self.system.id}/read/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.json()["read"])
        self.assertTrue(self.storage.get_notification(self.system.id).read)

    def test_cannot_mark_someone_elses(self):
        self.auth(self.user)
        resp = self.client.put(f"/api/notifications/{self.foreign.id}/read/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(self.storage.get_notification(self.foreign.id).read)

    def test_mark_unknown(self):
        self.auth(self.user)
        resp = self.client.put("/api/notifications/missing/read/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_all_read(self):
        self.auth(self.user)
        resp = self.client.post("/api/notifications/read-all/")

        self.assertEqual(resp.json(), {"marked_read": 2})
        self.assertEqual(self.storage.get_user_notifications(self.user.id, unread_only=True), [])
        self.assertFalse(self.storage.get_notification(self.foreign.id).read)
