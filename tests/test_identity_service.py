# tests/test_identity_service.py
import base64
import unittest

from mentormatch.exceptions import (
    DuplicateEmailError, InvalidCredentialError, ForbiddenError, NotFoundError,
    RoleImmutableError, UnsupportedMediaTypeError,
)
from mentormatch.models import UserRole
from mentormatch.schemas import AuthenticatedIdentity
from mentormatch.utils.response_enricher import ResponseEnricher
from tests.base import DatabaseTestCase

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64

class TestSignupAndLogin(DatabaseTestCase):

    def test_create_user_hashes_password(self):
        user = self.make_user(UserRole.MENTEE, password="hunter22")
        self.assertNotEqual(user.hashed_password, "hunter22")
        self.assertTrue(user.hashed_password.startswith("$2"))

    def test_duplicate_email_rejected_case_insensitively(self):
        self.identity_service.create_user("Ana@Example.com", "secret123", "Ana", UserRole.MENTOR)
        with self.assertRaises(DuplicateEmailError):
            self.identity_service.create_user("ana@example.com", "secret123", "Other", UserRole.MENTEE)

    def test_verify_credential_success(self):
        user = self.identity_service.create_user("bo@example.com", "secret123", "Bo", UserRole.MENTEE)
        self.assertEqual(self.identity_service.verify_credential("bo@example.com", "secret123").id, user.id)

    def test_wrong_password_and_unknown_email_fail_identically(self):
        self.identity_service.create_user("cy@example.com", "secret123", "Cy", UserRole.MENTEE)
        with self.assertRaises(InvalidCredentialError) as wrong_password:
            self.identity_service.verify_credential("cy@example.com", "nope-nope")
        with self.assertRaises(InvalidCredentialError) as unknown:
            self.identity_service.verify_credential("ghost@example.com", "secret123")
        self.assertEqual(str(wrong_password.exception), str(unknown.exception))

    def test_mentor_skills_normalised_mentee_skills_dropped(self):
        mentor = self.make_mentor(skills="React, Node.js")
        mentee = self.make_user(UserRole.MENTEE, skills=["React"])
        self.assertEqual(mentor.skills, ["React", "Node.js"])
        self.assertEqual(mentee.skills, [])

class TestProfileUpdate(DatabaseTestCase):

    def test_round_trip_returns_last_written_values(self):
        mentor = self.make_mentor(skills=["Go"])
        me = self.identity(mentor)
        self.identity_service.update_profile(me, mentor.id, {"bio": "first", "skills": ["Rust"]})
        self.identity_service.update_profile(me, mentor.id, {"bio": "second", "skills": "Python, SQL"})

        profile = self.identity_service.get_profile(mentor.id)
        self.assertEqual(profile.bio, "second")
        self.assertEqual(profile.skills, ["Python", "SQL"])
        self.assertEqual(profile.role, UserRole.MENTOR.value)

    def test_unchanged_role_is_accepted(self):
        mentee = self.make_mentee()
        updated = self.identity_service.update_profile(self.identity(mentee), mentee.id, {"role": "mentee", "name": "New"})
        self.assertEqual(updated.name, "New")
        self.assertEqual(updated.role, "mentee")

    def test_role_change_rejected_and_nothing_written(self):
        mentee = self.make_mentee(name="Original")
        with self.assertRaises(RoleImmutableError):
            self.identity_service.update_profile(
                self.identity(mentee), mentee.id, {"role": UserRole.MENTOR, "name": "Changed"}
            )
        self.db.expire_all()
        profile = self.identity_service.get_profile(mentee.id)
        self.assertEqual(profile.role, "mentee")
        self.assertEqual(profile.name, "Original")

    def test_only_owner_may_update(self):
        owner = self.make_mentee()
        other = self.make_mentee()
        with self.assertRaises(ForbiddenError):
            self.identity_service.update_profile(self.identity(other), owner.id, {"bio": "hijack"})

    def test_missing_user(self):
        ghost = AuthenticatedIdentity(user_id=999, role=UserRole.MENTEE)
        with self.assertRaises(NotFoundError):
            self.identity_service.update_profile(ghost, 999, {"bio": "x"})
        with self.assertRaises(NotFoundError):
            self.identity_service.get_profile(999)

class TestAvatar(DatabaseTestCase):

    def test_png_upload_stored_and_url_derived(self):
        mentor = self.make_mentor()
        self.assertIn("placehold.co", ResponseEnricher.image_url(mentor))

        updated = self.identity_service.set_avatar(self.identity(mentor), mentor.id, PNG_BYTES, "image/png")
        self.assertEqual(ResponseEnricher.image_url(updated), f"/api/images/mentor/{mentor.id}")
        self.assertEqual(self.identity_service.get_avatar(mentor.id, UserRole.MENTOR), (PNG_BYTES, "image/png"))

    def test_data_url_in_profile_update(self):
        mentee = self.make_mentee()
        data_url = "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode()
        self.identity_service.update_profile(self.identity(mentee), mentee.id, {"image": data_url})
        self.assertEqual(self.identity_service.get_avatar(mentee.id)[1], "image/jpeg")

    def test_unsupported_type_rejected(self):
        mentee = self.make_mentee()
        with self.assertRaises(UnsupportedMediaTypeError):
            self.identity_service.set_avatar(self.identity(mentee), mentee.id, b"GIF89a....", "image/gif")

    def test_declared_type_must_match_bytes(self):
        mentee = self.make_mentee()
        with self.assertRaises(UnsupportedMediaTypeError):
            self.identity_service.set_avatar(self.identity(mentee), mentee.id, JPEG_BYTES, "image/png")

    def test_oversize_rejected(self):
        mentee = self.make_mentee()
        too_big = PNG_BYTES + b"\x00" * (1024 * 1024)
        with self.assertRaises(UnsupportedMediaTypeError):
            self.identity_service.set_avatar(self.identity(mentee), mentee.id, too_big, "image/png")
        with self.assertRaises(NotFoundError):
            self.identity_service.get_avatar(mentee.id)

    def test_avatar_lookup_respects_role(self):
        mentee = self.make_mentee()
        self.identity_service.set_avatar(self.identity(mentee), mentee.id, PNG_BYTES, "image/png")
        with self.assertRaises(NotFoundError):
            self.identity_service.get_avatar(mentee.id, UserRole.MENTOR)

if __name__ == "__main__":
    unittest.main()
