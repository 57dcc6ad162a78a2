# mentormatch/services/match_request_service.py
from typing import List, NamedTuple
from sqlalchemy import and_, update
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..constants import ErrorMessages
from ..database import store_retry, translate_store_error
from ..models import MatchRequest, MatchStatus, Feedback, User, UserRole, utcnow
from ..schemas import AuthenticatedIdentity
from ..utils.validation_utils import ValidationUtils
from ..exceptions import (
    BusinessLogicError, ForbiddenError, InvalidArgumentError, InvalidStatusTransitionError,
    NotFoundError, DuplicatePendingForMenteeError, DuplicatePendingForPairError, StoreError,
)
import logging

logger = logging.getLogger(__name__)

class MatchRequestView(NamedTuple):
    request: MatchRequest
    has_feedback: bool

class MatchRequestService:
    """State machine for match requests.

    pending -> accepted | rejected   (target mentor)
    pending -> cancelled             (owning mentee)

    Every transition is a compare-and-set on status = 'pending', so of two racing
    transitions exactly one wins and the other sees InvalidStatusTransitionError.
    """

    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    @store_retry
    def create_request(self, identity: AuthenticatedIdentity, mentor_id: int, message: str) -> MatchRequest:
        """Creates a pending request from the calling mentee to a mentor."""
        self._require_role(identity, UserRole.MENTEE)
        if not message or not message.strip():
            raise InvalidArgumentError(ErrorMessages.EMPTY_MESSAGE)

        mentee_id = identity.user_id
        try:
            self.validator.get_mentor_or_404(mentor_id)

            # Row lock on the mentee serialises concurrent creates from the same
            # mentee where the store supports it; the partial unique indexes back it up.
            mentee = self.db.query(User).filter(
                User.id == mentee_id,
                User.role == UserRole.MENTEE.value
            ).with_for_update().first()
            if mentee is None:
                raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

            self.validator.check_no_pending_for_mentee(mentee_id)
            self.validator.check_no_pending_for_pair(mentee_id, mentor_id)

            request = MatchRequest(
                mentee_id=mentee_id,
                mentor_id=mentor_id,
                status=MatchStatus.PENDING.value,
                message=message,
            )
            self.db.add(request)
            self.db.commit()
            self.db.refresh(request)
            logger.info(f"Match request {request.id} created: mentee {mentee_id} -> mentor {mentor_id}")
            return request

        except BusinessLogicError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Pending-uniqueness constraint rejected request from mentee {mentee_id}: {e}")
            raise self._classify_duplicate(mentee_id, mentor_id) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating match request for mentee {mentee_id}: {e}")
            raise translate_store_error(e, "creating match request") from e

    def accept_request(self, identity: AuthenticatedIdentity, request_id: int) -> MatchRequest:
        """Accepts a pending request addressed to the calling mentor."""
        return self._transition(identity, request_id, MatchStatus.ACCEPTED)

    def reject_request(self, identity: AuthenticatedIdentity, request_id: int) -> MatchRequest:
        """Rejects a pending request addressed to the calling mentor."""
        return self._transition(identity, request_id, MatchStatus.REJECTED)

    def cancel_request(self, identity: AuthenticatedIdentity, request_id: int) -> MatchRequest:
        """Cancels a pending request sent by the calling mentee."""
        return self._transition(identity, request_id, MatchStatus.CANCELLED)

    def list_incoming(self, identity: AuthenticatedIdentity) -> List[MatchRequestView]:
        self._require_role(identity, UserRole.MENTOR)
        return self._views(
            identity.user_id,
            MatchRequest.mentor_id == identity.user_id,
            eager=MatchRequest.mentee,
        )

    def list_outgoing(self, identity: AuthenticatedIdentity) -> List[MatchRequestView]:
        self._require_role(identity, UserRole.MENTEE)
        return self._views(
            identity.user_id,
            MatchRequest.mentee_id == identity.user_id,
            eager=MatchRequest.mentor,
        )

    def history_with_mentor(self, identity: AuthenticatedIdentity, mentor_id: int) -> List[MatchRequestView]:
        """All requests between the calling mentee and one mentor, any status."""
        self._require_role(identity, UserRole.MENTEE)
        return self._views(
            identity.user_id,
            and_(MatchRequest.mentee_id == identity.user_id, MatchRequest.mentor_id == mentor_id),
            eager=MatchRequest.mentor,
        )

    # --- internals ---

    @store_retry
    def _transition(self, identity: AuthenticatedIdentity, request_id: int, target: MatchStatus) -> MatchRequest:
        try:
            request = self.validator.get_request_or_404(request_id)

            if target == MatchStatus.CANCELLED:
                owner_column, owner_id, role = MatchRequest.mentee_id, request.mentee_id, UserRole.MENTEE
                denied = ErrorMessages.NOT_OWNING_MENTEE
            else:
                owner_column, owner_id, role = MatchRequest.mentor_id, request.mentor_id, UserRole.MENTOR
                denied = ErrorMessages.NOT_TARGET_MENTOR

            if identity.role != role or identity.user_id != owner_id:
                raise ForbiddenError(denied)

            result = self.db.execute(
                update(MatchRequest)
                .where(
                    MatchRequest.id == request_id,
                    owner_column == identity.user_id,
                    MatchRequest.status == MatchStatus.PENDING.value,
                )
                .values(status=target.value, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                self.db.refresh(request)
                raise InvalidStatusTransitionError(f"{ErrorMessages.NOT_PENDING} (current: {request.status})")

            self.db.commit()
            self.db.refresh(request)
            logger.info(f"Match request {request_id} moved to {target.value} by user {identity.user_id}")
            return request

        except BusinessLogicError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error moving request {request_id} to {target.value}: {e}")
            raise translate_store_error(e, f"updating match request {request_id}") from e

    def _views(self, caller_id: int, criterion, eager) -> List[MatchRequestView]:
        rows = self.db.query(MatchRequest, Feedback.id).outerjoin(
            Feedback,
            and_(Feedback.match_request_id == MatchRequest.id, Feedback.reviewer_id == caller_id)
        ).options(
            joinedload(eager)
        ).filter(criterion).order_by(
            MatchRequest.created_at.desc(), MatchRequest.id.desc()
        ).all()
        return [MatchRequestView(request, feedback_id is not None) for request, feedback_id in rows]

    def _classify_duplicate(self, mentee_id: int, mentor_id: int) -> Exception:
        if self.validator.has_pending_for_mentee(mentee_id):
            return DuplicatePendingForMenteeError(ErrorMessages.PENDING_FOR_MENTEE)
        if self.validator.has_pending_for_pair(mentee_id, mentor_id):
            return DuplicatePendingForPairError(ErrorMessages.PENDING_FOR_PAIR)
        return StoreError("Constraint violation while creating match request")

    @staticmethod
    def _require_role(identity: AuthenticatedIdentity, role: UserRole):
        if identity.role != role:
            raise ForbiddenError(ErrorMessages.ROLE_REQUIRED.format(role=role.value))
