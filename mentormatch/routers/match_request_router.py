# mentormatch/routers/match_request_router.py
from typing import List
from fastapi import APIRouter, Depends, Path

from ..dependencies.auth_dependencies import require_mentor, require_mentee
from ..dependencies.service_dependencies import get_match_request_service
from ..exceptions import BusinessLogicError
from ..schemas import (
    MatchRequestCreate, MatchRequestResponse, IncomingMatchRequest, OutgoingMatchRequest,
    HistoryMatchRequest, AuthenticatedIdentity,
)
from ..services import MatchRequestService
from ..utils.http_errors import to_http_exception
from ..utils.response_enricher import ResponseEnricher

router = APIRouter(prefix="/api", tags=["match-requests"])

@router.post("/match-requests", response_model=MatchRequestResponse, status_code=201)
def create_match_request(
    payload: MatchRequestCreate,
    identity: AuthenticatedIdentity = Depends(require_mentee),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Send a match request to a mentor"""
    try:
        request = match_service.create_request(identity, payload.mentorId, payload.message)
        return ResponseEnricher.request(request)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/match-requests/incoming", response_model=List[IncomingMatchRequest])
def get_incoming_requests(
    identity: AuthenticatedIdentity = Depends(require_mentor),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Requests addressed to the calling mentor, newest first"""
    try:
        return ResponseEnricher.incoming(match_service.list_incoming(identity))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/match-requests/outgoing", response_model=List[OutgoingMatchRequest])
def get_outgoing_requests(
    identity: AuthenticatedIdentity = Depends(require_mentee),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Requests sent by the calling mentee, newest first, without message bodies"""
    try:
        return ResponseEnricher.outgoing(match_service.list_outgoing(identity))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.put("/match-requests/{request_id}/accept", response_model=MatchRequestResponse)
def accept_request(
    request_id: int = Path(..., description="The ID of the match request"),
    identity: AuthenticatedIdentity = Depends(require_mentor),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Accept a match request"""
    try:
        return ResponseEnricher.request(match_service.accept_request(identity, request_id))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.put("/match-requests/{request_id}/reject", response_model=MatchRequestResponse)
def reject_request(
    request_id: int = Path(..., description="The ID of the match request"),
    identity: AuthenticatedIdentity = Depends(require_mentor),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Reject a match request"""
    try:
        return ResponseEnricher.request(match_service.reject_request(identity, request_id))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.delete("/match-requests/{request_id}", response_model=MatchRequestResponse)
def cancel_request(
    request_id: int = Path(..., description="The ID of the match request"),
    identity: AuthenticatedIdentity = Depends(require_mentee),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Cancel a pending match request"""
    try:
        return ResponseEnricher.request(match_service.cancel_request(identity, request_id))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/match-requests/mentor/{mentor_id}", response_model=List[HistoryMatchRequest])
def get_history_with_mentor(
    mentor_id: int = Path(..., description="The ID of the mentor"),
    identity: AuthenticatedIdentity = Depends(require_mentee),
    match_service: MatchRequestService = Depends(get_match_request_service)
):
    """Every request between the calling mentee and one mentor, newest first"""
    try:
        return ResponseEnricher.history(match_service.history_with_mentor(identity, mentor_id))
    except BusinessLogicError as e:
        raise to_http_exception(e)
