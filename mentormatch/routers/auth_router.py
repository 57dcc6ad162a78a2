# mentormatch/routers/auth_router.py
from datetime import timedelta, datetime, timezone
from fastapi import APIRouter, Depends, Response

from ..config import get_settings
from ..dependencies.service_dependencies import get_identity_service
from ..exceptions import BusinessLogicError
from ..schemas import UserCreate, UserLogin, SignupResponse, Token, UserProfile, AuthenticatedIdentity
from ..security import create_access_token, get_current_identity
from ..services import IdentityService
from ..utils.http_errors import to_http_exception
from ..utils.response_enricher import ResponseEnricher

router = APIRouter(prefix="/api", tags=["authentication"])
settings = get_settings()

@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(
    user: UserCreate,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Register a new mentor or mentee"""
    try:
        db_user = identity_service.create_user(
            email=user.email,
            password=user.password,
            name=user.name,
            role=user.role,
            bio=user.bio,
            skills=user.skills,
        )
        return SignupResponse(userId=db_user.id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.post("/login", response_model=Token)
def login(
    credentials: UserLogin,
    response: Response,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Login and set HttpOnly cookie, also return the bearer token"""
    try:
        user = identity_service.verify_credential(credentials.email, credentials.password)
    except BusinessLogicError as e:
        raise to_http_exception(e)

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire_time_utc = datetime.now(timezone.utc) + access_token_expires
    access_token = create_access_token(user, expires_delta=access_token_expires)

    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=expire_time_utc,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )

    return Token(token=access_token)

@router.get("/me", response_model=UserProfile)
def read_current_user(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Get the authenticated user's profile"""
    try:
        return ResponseEnricher.profile(identity_service.get_profile(identity.user_id))
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.post("/logout", status_code=200)
def logout(response: Response):
    """Logout user by clearing cookie"""
    response.delete_cookie(key="access_token")
    return {"message": "Logged out successfully"}
