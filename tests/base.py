# tests/base.py
import itertools
import unittest

from mentormatch.database import Base, SessionLocal, engine
from mentormatch.migrations import run_migrations
from mentormatch.models import UserRole
from mentormatch.schemas import AuthenticatedIdentity
from mentormatch.services import IdentityService

_emails = itertools.count(1)

class DatabaseTestCase(unittest.TestCase):
    """Fresh schema on the shared in-memory database for every test."""

    def setUp(self):
        Base.metadata.drop_all(bind=engine)
        run_migrations(engine)
        self.db = SessionLocal()
        self.identity_service = IdentityService(self.db)

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(bind=engine)

    def make_user(self, role, name=None, skills=None, bio="", password="secret123"):
        number = next(_emails)
        return self.identity_service.create_user(
            email=f"user{number}@example.com",
            password=password,
            name=name or f"User {number}",
            role=role,
            bio=bio,
            skills=skills,
        )

    def make_mentor(self, name=None, skills=None):
        return self.make_user(UserRole.MENTOR, name=name, skills=skills)

    def make_mentee(self, name=None):
        return self.make_user(UserRole.MENTEE, name=name)

    @staticmethod
    def identity(user):
        return AuthenticatedIdentity(user_id=user.id, role=user.role)
