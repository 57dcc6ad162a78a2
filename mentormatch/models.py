# mentormatch/models.py
from enum import Enum
from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, JSON, LargeBinary, ForeignKey, Sequence,
    CheckConstraint, UniqueConstraint, Index, text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .database import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# JSONB on PostgreSQL, plain JSON elsewhere (sqlite in tests)
SkillsType = JSON().with_variant(JSONB(), "postgresql")

PENDING_ONLY = text("status = 'pending'")

class UserRole(str, Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"

# Enum for Match Request Status
class MatchStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"   # Mentor accepts, terminal
    REJECTED = "rejected"   # Mentor rejects, terminal
    CANCELLED = "cancelled" # Mentee cancels a PENDING request, terminal


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('mentor', 'mentee')", name="ck_users_role"),
    )

    id = Column(Integer, Sequence('user_id_seq'), primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=False, default="")
    skills = Column(SkillsType, nullable=False, default=list)
    avatar_data = Column(LargeBinary, nullable=True)
    avatar_content_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    requests_received = relationship("MatchRequest", back_populates="mentor", foreign_keys="MatchRequest.mentor_id")
    requests_sent = relationship("MatchRequest", back_populates="mentee", foreign_keys="MatchRequest.mentee_id")

    @property
    def has_avatar(self) -> bool:
        return self.avatar_content_type is not None

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

class MatchRequest(Base):
    __tablename__ = "match_requests"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'cancelled')",
            name="ck_match_requests_status",
        ),
        # At most one pending request per mentee, system-wide
        Index(
            "uq_match_requests_pending_mentee", "mentee_id", unique=True,
            postgresql_where=PENDING_ONLY, sqlite_where=PENDING_ONLY,
        ),
        # At most one pending request per (mentor, mentee) pair
        Index(
            "uq_match_requests_pending_pair", "mentor_id", "mentee_id", unique=True,
            postgresql_where=PENDING_ONLY, sqlite_where=PENDING_ONLY,
        ),
    )

    id = Column(Integer, Sequence('match_request_id_seq'), primary_key=True, index=True)

    mentor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mentee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    message = Column(Text, nullable=False)
    status = Column(String, default=MatchStatus.PENDING.value, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    mentor = relationship("User", back_populates="requests_received", foreign_keys=[mentor_id])
    mentee = relationship("User", back_populates="requests_sent", foreign_keys=[mentee_id])

    def other_party(self, user_id: int) -> int:
        return self.mentee_id if user_id == self.mentor_id else self.mentor_id

    def __repr__(self):
        return f"<MatchRequest(id={self.id}, mentee_id={self.mentee_id}, mentor_id={self.mentor_id}, status='{self.status}')>"

class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("match_request_id", "reviewer_id", name="uq_feedback_match_reviewer"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating"),
    )

    id = Column(Integer, Sequence('feedback_id_seq'), primary_key=True, index=True)
    match_request_id = Column(Integer, ForeignKey("match_requests.id"), nullable=False, index=True)
    reviewer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reviewee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    reviewer = relationship("User", foreign_keys=[reviewer_id], viewonly=True)

    def __repr__(self):
        return f"<Feedback(id={self.id}, match_request_id={self.match_request_id}, reviewer_id={self.reviewer_id}, rating={self.rating})>"
