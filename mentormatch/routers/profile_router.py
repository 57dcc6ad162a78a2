# mentormatch/routers/profile_router.py
from fastapi import APIRouter, Depends, File, Path, Response, UploadFile

from ..config import get_settings
from ..dependencies.service_dependencies import get_identity_service
from ..exceptions import BusinessLogicError, UnsupportedMediaTypeError
from ..constants import ErrorMessages
from ..models import UserRole
from ..schemas import ProfileUpdate, UserProfile, AuthenticatedIdentity
from ..security import get_current_identity
from ..services import IdentityService
from ..utils.http_errors import to_http_exception
from ..utils.response_enricher import ResponseEnricher

router = APIRouter(prefix="/api", tags=["profiles"])
settings = get_settings()

@router.put("/profile", response_model=UserProfile)
def update_profile(
    profile_data: ProfileUpdate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Update the caller's own profile"""
    try:
        target_id = profile_data.id if profile_data.id is not None else identity.user_id
        fields = profile_data.model_dump(exclude_unset=True, exclude={"id"})
        user = identity_service.update_profile(identity, target_id, fields)
        return ResponseEnricher.profile(user)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.put("/profile/image", response_model=UserProfile)
def upload_profile_image(
    image: UploadFile = File(...),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Replace the caller's avatar with an uploaded JPEG or PNG"""
    try:
        # Read one byte past the ceiling so oversize files are caught without buffering them whole
        data = image.file.read(settings.AVATAR_MAX_BYTES + 1)
        if len(data) > settings.AVATAR_MAX_BYTES:
            raise UnsupportedMediaTypeError(ErrorMessages.IMAGE_TOO_LARGE.format(limit=settings.AVATAR_MAX_BYTES))
        user = identity_service.set_avatar(identity, identity.user_id, data, image.content_type)
        return ResponseEnricher.profile(user)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/images/{role}/{user_id}")
def get_profile_image(
    role: UserRole = Path(..., description="Role of the image owner"),
    user_id: int = Path(..., description="The ID of the image owner"),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Serve stored avatar bytes with their content type"""
    try:
        data, content_type = identity_service.get_avatar(user_id, role)
        return Response(content=data, media_type=content_type)
    except BusinessLogicError as e:
        raise to_http_exception(e)
