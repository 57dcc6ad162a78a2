# mentormatch/routers/__init__.py
from . import auth_router
from . import profile_router
from . import mentor_router
from . import match_request_router
from . import feedback_router

__all__ = [
    "auth_router",
    "profile_router",
    "mentor_router",
    "match_request_router",
    "feedback_router"
]
