# mentormatch/routers/mentor_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies.auth_dependencies import require_mentee
from ..dependencies.service_dependencies import get_directory_service
from ..exceptions import BusinessLogicError
from ..schemas import MentorSummary, AuthenticatedIdentity
from ..services import MentorDirectoryService
from ..utils.http_errors import to_http_exception
from ..utils.response_enricher import ResponseEnricher

router = APIRouter(prefix="/api", tags=["mentors"])

@router.get("/mentors", response_model=List[MentorSummary])
def list_mentors(
    skill: Optional[str] = Query(None, description="Only mentors holding this skill (case-insensitive)"),
    order_by: Optional[str] = Query(None, alias="orderBy", description='"name" or "skill"; id order when omitted'),
    identity: AuthenticatedIdentity = Depends(require_mentee),
    directory_service: MentorDirectoryService = Depends(get_directory_service)
):
    """Browse mentors"""
    try:
        mentors = directory_service.list_mentors(skill, order_by)
        return ResponseEnricher.mentor_summaries(mentors)
    except BusinessLogicError as e:
        raise to_http_exception(e)
