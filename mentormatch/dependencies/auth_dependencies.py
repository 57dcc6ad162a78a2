# mentormatch/dependencies/auth_dependencies.py
from typing import Callable
from fastapi import Depends, HTTPException, status
from ..models import UserRole
from ..schemas import AuthenticatedIdentity
from ..security import get_current_identity
from ..constants import ErrorMessages

def require_role(role: UserRole) -> Callable:
    """
    Factory to create role-gated dependencies.
    The role comes from the verified token, so no store lookup is involved.
    """
    def dependency(identity: AuthenticatedIdentity = Depends(get_current_identity)) -> AuthenticatedIdentity:
        if identity.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=ErrorMessages.ROLE_REQUIRED.format(role=role.value),
            )
        return identity

    return dependency

# Create specific dependencies
require_mentor = require_role(UserRole.MENTOR)
require_mentee = require_role(UserRole.MENTEE)
