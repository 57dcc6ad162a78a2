# mentormatch/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.identity_service import IdentityService
from ..services.directory_service import MentorDirectoryService
from ..services.match_request_service import MatchRequestService
from ..services.feedback_service import FeedbackService

def get_identity_service(db: Session = Depends(get_db)) -> IdentityService:
    return IdentityService(db)

def get_directory_service(db: Session = Depends(get_db)) -> MentorDirectoryService:
    return MentorDirectoryService(db)

def get_match_request_service(db: Session = Depends(get_db)) -> MatchRequestService:
    return MatchRequestService(db)

def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)
