# tests/test_api.py
import base64
import unittest

from fastapi.testclient import TestClient

from mentormatch.database import Base, engine
from mentormatch.main import app
from mentormatch.migrations import run_migrations

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

class ApiTestCase(unittest.TestCase):

    def setUp(self):
        Base.metadata.drop_all(bind=engine)
        run_migrations(engine)
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        Base.metadata.drop_all(bind=engine)

    def signup(self, email, role, name, skills=None):
        payload = {"email": email, "password": "secret123", "name": name, "role": role}
        if skills is not None:
            payload["skills"] = skills
        response = self.client.post("/api/signup", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["userId"]

    def login(self, email):
        response = self.client.post("/api/login", json={"email": email, "password": "secret123"})
        self.assertEqual(response.status_code, 200, response.text)
        self.client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}

class TestAuthentication(ApiTestCase):

    def test_signup_login_me(self):
        user_id = self.signup("tess@example.com", "mentor", "Tess", "Python, Go")
        headers = self.login("TESS@example.com")
        me = self.client.get("/api/me", headers=headers).json()
        self.assertEqual(me["id"], user_id)
        self.assertEqual(me["role"], "mentor")
        self.assertEqual(me["profile"]["skills"], ["Python", "Go"])
        self.assertNotIn("hashed_password", me)

    def test_duplicate_email(self):
        self.signup("tess@example.com", "mentor", "Tess")
        response = self.client.post(
            "/api/signup",
            json={"email": "Tess@Example.com", "password": "secret123", "name": "Tess", "role": "mentee"},
        )
        self.assertEqual(response.status_code, 409)

    def test_bad_credentials_look_alike(self):
        self.signup("tess@example.com", "mentor", "Tess")
        wrong = self.client.post("/api/login", json={"email": "tess@example.com", "password": "nope-nope"})
        unknown = self.client.post("/api/login", json={"email": "ghost@example.com", "password": "secret123"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())

    def test_token_required(self):
        self.client.cookies.clear()
        self.assertEqual(self.client.get("/api/me").status_code, 401)
        self.assertEqual(self.client.get("/api/me", headers={"Authorization": "Bearer junk"}).status_code, 401)

    def test_cookie_login(self):
        self.signup("tess@example.com", "mentor", "Tess")
        self.client.post("/api/login", json={"email": "tess@example.com", "password": "secret123"})
        self.assertEqual(self.client.get("/api/me").status_code, 200)

class TestMatchingFlow(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.mentor_id = self.signup("tess@example.com", "mentor", "Tess", ["Java", "Spring"])
        self.other_mentor_id = self.signup("theo@example.com", "mentor", "Theo", ["JavaScript"])
        self.mentee_id = self.signup("max@example.com", "mentee", "Max")
        self.as_mentor = self.login("tess@example.com")
        self.as_mentee = self.login("max@example.com")

    def test_directory_is_for_mentees(self):
        self.assertEqual(self.client.get("/api/mentors", headers=self.as_mentor).status_code, 403)
        names = [m["profile"]["name"] for m in self.client.get("/api/mentors", headers=self.as_mentee).json()]
        self.assertEqual(names, ["Tess", "Theo"])

    def test_directory_skill_filter_and_sort(self):
        java = self.client.get("/api/mentors", params={"skill": "java"}, headers=self.as_mentee).json()
        self.assertEqual([m["id"] for m in java], [self.mentor_id])
        bad = self.client.get("/api/mentors", params={"orderBy": "rating"}, headers=self.as_mentee)
        self.assertEqual(bad.status_code, 400)

    def test_request_lifecycle_and_feedback(self):
        created = self.client.post(
            "/api/match-requests", json={"mentorId": self.mentor_id, "message": "Please help"}, headers=self.as_mentee
        )
        self.assertEqual(created.status_code, 201, created.text)
        request_id = created.json()["id"]
        self.assertEqual(created.json()["status"], "pending")

        second = self.client.post(
            "/api/match-requests", json={"mentorId": self.other_mentor_id, "message": "me too"}, headers=self.as_mentee
        )
        self.assertEqual(second.status_code, 400)

        incoming = self.client.get("/api/match-requests/incoming", headers=self.as_mentor).json()
        self.assertEqual(incoming[0]["message"], "Please help")
        self.assertEqual(incoming[0]["menteeName"], "Max")

        outgoing = self.client.get("/api/match-requests/outgoing", headers=self.as_mentee).json()
        self.assertNotIn("message", outgoing[0])
        self.assertEqual(outgoing[0]["mentorName"], "Tess")

        self.assertEqual(
            self.client.put(f"/api/match-requests/{request_id}/accept", headers=self.as_mentee).status_code, 403
        )
        accepted = self.client.put(f"/api/match-requests/{request_id}/accept", headers=self.as_mentor)
        self.assertEqual(accepted.json()["status"], "accepted")
        self.assertEqual(self.client.delete(f"/api/match-requests/{request_id}", headers=self.as_mentee).status_code, 400)

        feedback = {"matchRequestId": request_id, "revieweeId": self.mentor_id, "rating": 5, "comment": "Great"}
        self.assertEqual(self.client.post("/api/feedback", json=feedback, headers=self.as_mentee).status_code, 201)
        self.assertEqual(self.client.post("/api/feedback", json=feedback, headers=self.as_mentee).status_code, 409)

        history = self.client.get(f"/api/match-requests/mentor/{self.mentor_id}", headers=self.as_mentee).json()
        self.assertTrue(history[0]["hasFeedback"])
        incoming = self.client.get("/api/match-requests/incoming", headers=self.as_mentor).json()
        self.assertFalse(incoming[0]["hasFeedback"])

        received = self.client.get("/api/feedback/received", headers=self.as_mentor).json()
        self.assertEqual(received[0]["reviewer"], {"name": "Max", "role": "mentee"})
        self.assertEqual(received[0]["rating"], 5)

    def test_cancel_then_request_again(self):
        created = self.client.post(
            "/api/match-requests", json={"mentorId": self.mentor_id, "message": "hi"}, headers=self.as_mentee
        ).json()
        cancelled = self.client.delete(f"/api/match-requests/{created['id']}", headers=self.as_mentee)
        self.assertEqual(cancelled.json()["status"], "cancelled")
        again = self.client.post(
            "/api/match-requests", json={"mentorId": self.other_mentor_id, "message": "hi"}, headers=self.as_mentee
        )
        self.assertEqual(again.status_code, 201)

    def test_unknown_request_and_mentor(self):
        self.assertEqual(self.client.put("/api/match-requests/999/reject", headers=self.as_mentor).status_code, 404)
        missing = self.client.post(
            "/api/match-requests", json={"mentorId": self.mentee_id, "message": "hi"}, headers=self.as_mentee
        )
        self.assertEqual(missing.status_code, 404)

    def test_feedback_rating_out_of_range(self):
        created = self.client.post(
            "/api/match-requests", json={"mentorId": self.mentor_id, "message": "hi"}, headers=self.as_mentee
        ).json()
        self.client.put(f"/api/match-requests/{created['id']}/accept", headers=self.as_mentor)
        response = self.client.post(
            "/api/feedback",
            json={"matchRequestId": created["id"], "revieweeId": self.mentor_id, "rating": 6},
            headers=self.as_mentee,
        )
        self.assertEqual(response.status_code, 400)

class TestProfiles(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.mentor_id = self.signup("tess@example.com", "mentor", "Tess")
        self.as_mentor = self.login("tess@example.com")

    def test_placeholder_then_uploaded_image(self):
        me = self.client.get("/api/me", headers=self.as_mentor).json()
        self.assertIn("placehold", me["profile"]["imageUrl"])

        upload = self.client.put(
            "/api/profile/image", files={"image": ("me.png", PNG_BYTES, "image/png")}, headers=self.as_mentor
        )
        self.assertEqual(upload.status_code, 200, upload.text)
        image_url = upload.json()["profile"]["imageUrl"]
        self.assertEqual(image_url, f"/api/images/mentor/{self.mentor_id}")

        served = self.client.get(image_url, headers=self.as_mentor)
        self.assertEqual(served.content, PNG_BYTES)
        self.assertEqual(served.headers["content-type"], "image/png")
        self.assertEqual(self.client.get(f"/api/images/mentee/{self.mentor_id}", headers=self.as_mentor).status_code, 404)

    def test_unsupported_image_type(self):
        upload = self.client.put(
            "/api/profile/image", files={"image": ("me.gif", b"GIF89a" + b"\x00" * 10, "image/gif")},
            headers=self.as_mentor,
        )
        self.assertEqual(upload.status_code, 415)

    def test_profile_update_with_data_url(self):
        data_url = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
        response = self.client.put(
            "/api/profile",
            json={"name": "Tess B", "bio": "Backend", "skills": ["Go"], "image": data_url},
            headers=self.as_mentor,
        )
        self.assertEqual(response.status_code, 200, response.text)
        profile = response.json()["profile"]
        self.assertEqual((profile["name"], profile["bio"], profile["skills"]), ("Tess B", "Backend", ["Go"]))

    def test_role_cannot_change(self):
        response = self.client.put("/api/profile", json={"role": "mentee"}, headers=self.as_mentor)
        self.assertEqual(response.status_code, 400)

    def test_cannot_edit_someone_else(self):
        other = self.signup("max@example.com", "mentee", "Max")
        response = self.client.put("/api/profile", json={"id": other, "name": "Hacked"}, headers=self.as_mentor)
        self.assertEqual(response.status_code, 403)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json()["status"], "healthy")

if __name__ == "__main__":
    unittest.main()
