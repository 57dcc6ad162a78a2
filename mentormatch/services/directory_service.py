# mentormatch/services/directory_service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, load_only

from ..constants import ErrorMessages, MentorSortKey
from ..exceptions import InvalidArgumentError
from ..models import User, UserRole
from ..utils.skills import has_skill

logger = logging.getLogger(__name__)

def _skill_sort_key(mentor: User):
    # Mentors without skills go last; ties fall back to name then id
    skills = [s.casefold() for s in (mentor.skills or [])]
    return (not skills, skills, mentor.name.casefold(), mentor.id)

class MentorDirectoryService:
    """Read-only view over mentor accounts."""

    def __init__(self, db: Session):
        self.db = db

    def list_mentors(self, skill_filter: Optional[str] = None, sort_key: Optional[str] = None) -> List[User]:
        """Lists mentors, optionally keeping only those holding `skill_filter`.

        sort_key is "name", "skill", or None/"" for id order.
        """
        if sort_key and sort_key not in MentorSortKey.ALLOWED:
            raise InvalidArgumentError(ErrorMessages.INVALID_SORT_KEY)

        query = self.db.query(User).options(
            load_only(User.id, User.email, User.role, User.name, User.bio, User.skills, User.avatar_content_type)
        ).filter(User.role == UserRole.MENTOR.value)

        if sort_key == MentorSortKey.NAME:
            query = query.order_by(User.name.asc(), User.id.asc())
        else:
            query = query.order_by(User.id.asc())

        mentors = query.all()

        if skill_filter and skill_filter.strip():
            mentors = [m for m in mentors if has_skill(m.skills or [], skill_filter)]

        if sort_key == MentorSortKey.SKILL:
            mentors.sort(key=_skill_sort_key)

        logger.debug(f"Directory returned {len(mentors)} mentors (skill={skill_filter!r}, sort={sort_key!r})")
        return mentors
