# mentormatch/services/identity_service.py
from typing import Dict, Any, Optional, List, Tuple, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..config import get_settings
from ..constants import ErrorMessages
from ..database import store_retry, translate_store_error
from ..models import User, UserRole, utcnow
from ..schemas import AuthenticatedIdentity
from ..security import get_password_hash, verify_password, dummy_verify
from ..utils.media_utils import validate_avatar, decode_data_url
from ..utils.skills import normalize_skills
from ..utils.validation_utils import ValidationUtils
from ..exceptions import (
    BusinessLogicError, DuplicateEmailError, InvalidCredentialError, ForbiddenError,
    NotFoundError, RoleImmutableError,
)
import logging

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "bio", "skills")

def normalize_email(email: str) -> str:
    return email.strip().lower()

class IdentityService:
    """Owns user records: signup, credential checks, profile reads and owner-only updates."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.validator = ValidationUtils(db)

    @store_retry
    def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole,
        bio: Optional[str] = None,
        skills: Optional[Union[List[str], str]] = None,
    ) -> User:
        """Creates a user with a salted password hash; email must be unused."""
        email = normalize_email(email)
        role = UserRole(role)
        try:
            if self.db.query(User.id).filter(User.email == email).first():
                raise DuplicateEmailError(ErrorMessages.DUPLICATE_EMAIL)

            user = User(
                email=email,
                hashed_password=get_password_hash(password),
                name=name,
                role=role.value,
                bio=bio or "",
                skills=normalize_skills(skills) if role == UserRole.MENTOR else [],
            )
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            logger.info(f"User {user.id} created with role {user.role}")
            return user

        except BusinessLogicError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email
            self.db.rollback()
            logger.info(f"Integrity error creating user: {e}")
            raise DuplicateEmailError(ErrorMessages.DUPLICATE_EMAIL)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating user: {e}")
            raise translate_store_error(e, "creating user") from e

    def verify_credential(self, email: str, password: str) -> User:
        """Returns the user for a matching email/password pair.

        Unknown email and wrong password raise the same error, and both paths run
        a full hash comparison.
        """
        user = self.db.query(User).filter(User.email == normalize_email(email)).first()
        if user is None:
            dummy_verify()
            raise InvalidCredentialError(ErrorMessages.INVALID_CREDENTIALS)
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialError(ErrorMessages.INVALID_CREDENTIALS)
        return user

    def get_profile(self, user_id: int) -> User:
        return self.validator.get_user_or_404(user_id)

    def _check_owner(self, identity: AuthenticatedIdentity, user_id: int) -> User:
        if identity.user_id != user_id:
            raise ForbiddenError(ErrorMessages.FORBIDDEN_PROFILE)
        return self.validator.get_user_or_404(user_id)

    @store_retry
    def update_profile(self, identity: AuthenticatedIdentity, user_id: int, fields: Dict[str, Any]) -> User:
        """Applies name/bio/skills/avatar changes for the owner of the record.

        A `role` entry is tolerated only when it equals the stored role. An `image`
        entry is a base64 data URL; `avatar` may carry a (bytes, content_type) pair.
        Last writer wins for concurrent updates.
        """
        try:
            user = self._check_owner(identity, user_id)

            requested_role = fields.get("role")
            if requested_role is not None and UserRole(requested_role).value != user.role:
                raise RoleImmutableError(ErrorMessages.ROLE_IMMUTABLE)

            avatar = self._resolve_avatar(fields)

            for key in EDITABLE_FIELDS:
                if key not in fields or fields[key] is None:
                    continue
                value = fields[key]
                if key == "skills":
                    value = normalize_skills(value) if user.role == UserRole.MENTOR.value else []
                setattr(user, key, value)

            if avatar is not None:
                user.avatar_data, user.avatar_content_type = avatar

            user.updated_at = utcnow()
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            logger.info(f"User {user.id} profile updated")
            return user

        except BusinessLogicError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating user {user_id}: {e}")
            raise translate_store_error(e, "updating profile") from e

    def set_avatar(self, identity: AuthenticatedIdentity, user_id: int, data: bytes, content_type: str) -> User:
        """Stores a whole avatar blob for the owner."""
        return self.update_profile(identity, user_id, {"avatar": (data, content_type)})

    def get_avatar(self, user_id: int, role: Optional[UserRole] = None) -> Tuple[bytes, str]:
        query = self.db.query(User).filter(User.id == user_id)
        if role is not None:
            query = query.filter(User.role == UserRole(role).value)
        user = query.first()
        if user is None or not user.has_avatar:
            raise NotFoundError("Image not found")
        return user.avatar_data, user.avatar_content_type

    def _resolve_avatar(self, fields: Dict[str, Any]) -> Optional[Tuple[bytes, str]]:
        if fields.get("avatar") is not None:
            data, content_type = fields["avatar"]
        elif fields.get("image"):
            data, content_type = decode_data_url(fields["image"])
        else:
            return None
        return validate_avatar(data, content_type, self.settings.AVATAR_MAX_BYTES)
