# mentormatch/utils/validation_utils.py
from sqlalchemy.orm import Session
from ..models import User, UserRole, MatchRequest, MatchStatus, Feedback
from ..constants import ErrorMessages
from ..exceptions import (
    NotFoundError, MentorNotFoundError,
    DuplicatePendingForMenteeError, DuplicatePendingForPairError,
)

class ValidationUtils:
    def __init__(self, db: Session):
        self.db = db

    def get_user_or_404(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)
        return user

    def get_mentor_or_404(self, mentor_id: int) -> User:
        mentor = self.db.query(User).filter(
            User.id == mentor_id,
            User.role == UserRole.MENTOR.value
        ).first()
        if not mentor:
            raise MentorNotFoundError(ErrorMessages.MENTOR_NOT_FOUND)
        return mentor

    def get_request_or_404(self, request_id: int) -> MatchRequest:
        request = self.db.query(MatchRequest).filter(MatchRequest.id == request_id).first()
        if not request:
            raise NotFoundError(ErrorMessages.REQUEST_NOT_FOUND)
        return request

    def has_pending_for_mentee(self, mentee_id: int) -> bool:
        return self.db.query(MatchRequest.id).filter(
            MatchRequest.mentee_id == mentee_id,
            MatchRequest.status == MatchStatus.PENDING.value
        ).first() is not None

    def has_pending_for_pair(self, mentee_id: int, mentor_id: int) -> bool:
        return self.db.query(MatchRequest.id).filter(
            MatchRequest.mentee_id == mentee_id,
            MatchRequest.mentor_id == mentor_id,
            MatchRequest.status == MatchStatus.PENDING.value
        ).first() is not None

    def check_no_pending_for_mentee(self, mentee_id: int):
        if self.has_pending_for_mentee(mentee_id):
            raise DuplicatePendingForMenteeError(ErrorMessages.PENDING_FOR_MENTEE)

    def check_no_pending_for_pair(self, mentee_id: int, mentor_id: int):
        if self.has_pending_for_pair(mentee_id, mentor_id):
            raise DuplicatePendingForPairError(ErrorMessages.PENDING_FOR_PAIR)

    def has_feedback(self, request_id: int, reviewer_id: int) -> bool:
        return self.db.query(Feedback.id).filter(
            Feedback.match_request_id == request_id,
            Feedback.reviewer_id == reviewer_id
        ).first() is not None
