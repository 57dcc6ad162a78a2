# mentormatch/services/feedback_service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..config import get_settings
from ..constants import BusinessRules, ErrorMessages
from ..database import store_retry, translate_store_error
from ..models import Feedback, MatchRequest, MatchStatus
from ..schemas import AuthenticatedIdentity
from ..utils.validation_utils import ValidationUtils
from ..exceptions import (
    BusinessLogicError, MatchNotFoundError, NotAcceptedYetError, NotAParticipantError,
    RevieweeMismatchError, AlreadyReviewedError, InvalidRatingError, InvalidArgumentError,
)

logger = logging.getLogger(__name__)

class FeedbackService:
    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.validator = ValidationUtils(db)

    @store_retry
    def submit_feedback(
        self,
        identity: AuthenticatedIdentity,
        match_request_id: int,
        reviewee_id: int,
        rating: int,
        comment: Optional[str] = None,
    ) -> Feedback:
        """Records the caller's one-time rating of the other party of an accepted match.

        Checks run in a fixed order: match exists, match accepted, caller takes
        part, reviewee is the other party, no earlier feedback, rating in range.
        """
        reviewer_id = identity.user_id
        try:
            match = self.db.query(MatchRequest).filter(MatchRequest.id == match_request_id).first()
            if match is None:
                raise MatchNotFoundError(ErrorMessages.MATCH_NOT_FOUND)
            if match.status != MatchStatus.ACCEPTED.value:
                raise NotAcceptedYetError(ErrorMessages.NOT_ACCEPTED)

            if reviewer_id not in (match.mentor_id, match.mentee_id):
                raise NotAParticipantError(ErrorMessages.NOT_PARTICIPANT)
            if reviewee_id == reviewer_id or reviewee_id != match.other_party(reviewer_id):
                raise RevieweeMismatchError(ErrorMessages.REVIEWEE_MISMATCH)

            if self.validator.has_feedback(match_request_id, reviewer_id):
                raise AlreadyReviewedError(ErrorMessages.ALREADY_REVIEWED)

            self._validate_rating(rating)
            comment = self._validate_comment(comment)

            feedback = Feedback(
                match_request_id=match_request_id,
                reviewer_id=reviewer_id,
                reviewee_id=reviewee_id,
                rating=rating,
                comment=comment,
            )
            self.db.add(feedback)
            self.db.commit()
            self.db.refresh(feedback)
            logger.info(f"Feedback {feedback.id} recorded on match {match_request_id} by user {reviewer_id}")
            return feedback

        except BusinessLogicError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            # A concurrent identical submission got in first
            self.db.rollback()
            logger.info(f"Duplicate feedback on match {match_request_id} by user {reviewer_id}: {e}")
            raise AlreadyReviewedError(ErrorMessages.ALREADY_REVIEWED) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error recording feedback on match {match_request_id}: {e}")
            raise translate_store_error(e, "recording feedback") from e

    def list_received(self, identity: AuthenticatedIdentity) -> List[Feedback]:
        """Feedback about the caller, newest first, with the reviewer loaded."""
        return self.db.query(Feedback).options(
            joinedload(Feedback.reviewer)
        ).filter(
            Feedback.reviewee_id == identity.user_id
        ).order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()

    @staticmethod
    def _validate_rating(rating) -> None:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidRatingError(ErrorMessages.INVALID_RATING)
        if not BusinessRules.MIN_RATING <= rating <= BusinessRules.MAX_RATING:
            raise InvalidRatingError(ErrorMessages.INVALID_RATING)

    def _validate_comment(self, comment: Optional[str]) -> Optional[str]:
        if comment is None or not comment.strip():
            return None
        limit = self.settings.FEEDBACK_COMMENT_MAX_LENGTH
        if len(comment) > limit:
            raise InvalidArgumentError(ErrorMessages.COMMENT_TOO_LONG.format(limit=limit))
        return comment
