from typing import List
from fastapi import APIRouter, Depends

from ..dependencies.service_dependencies import get_feedback_service
from ..exceptions import BusinessLogicError
from ..schemas import FeedbackCreate, FeedbackResponse, ReceivedFeedback, AuthenticatedIdentity
from ..security import get_current_identity
from ..services import FeedbackService
from ..utils.http_errors import to_http_exception
from ..utils.response_enricher import ResponseEnricher

router = APIRouter(prefix="/api", tags=["feedback"])

@router.post("/feedback", response_model=FeedbackResponse, status_code=201)
def submit_feedback(
    feedback_data: FeedbackCreate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    feedback_service: FeedbackService = Depends(get_feedback_service)
):
    """Rate the other party of an accepted match (works for both mentor and mentee roles)"""
    try:
        feedback = feedback_service.submit_feedback(
            identity,
            feedback_data.matchRequestId,
            feedback_data.revieweeId,
            feedback_data.rating,
            feedback_data.comment,
        )
        return ResponseEnricher.feedback(feedback)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/feedback/received", response_model=List[ReceivedFeedback])
def get_received_feedback(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    feedback_service: FeedbackService = Depends(get_feedback_service)
):
    """Feedback left about the caller, newest first"""
    return ResponseEnricher.received(feedback_service.list_received(identity))
