# mentormatch/services/__init__.py
from .identity_service import IdentityService
from .directory_service import MentorDirectoryService
from .match_request_service import MatchRequestService, MatchRequestView
from .feedback_service import FeedbackService

__all__ = ["IdentityService", "MentorDirectoryService", "MatchRequestService", "MatchRequestView", "FeedbackService"]
