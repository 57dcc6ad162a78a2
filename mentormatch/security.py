from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status, Request, Header, Cookie
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from .config import get_settings
from .models import User
from .schemas import AuthenticatedIdentity

import logging
logger = logging.getLogger(__name__)

settings = get_settings()

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plain-text password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hashes a plain-text password."""
    return pwd_context.hash(password)

def dummy_verify() -> None:
    """Spends the same hashing time as a real verify, for unknown accounts."""
    pwd_context.dummy_verify()

# --- JWT Token Handling ---
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a JWT access token carrying the user's id and role."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "sub": str(user.id),
        "iat": now,
        "nbf": now,
        "exp": expire,
        "role": user.role,
        "name": user.name,
        "email": user.email,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def decode_identity(token: str) -> Optional[AuthenticatedIdentity]:
    """Returns the identity a token vouches for, or None when it does not verify."""
    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
        return AuthenticatedIdentity(user_id=int(payload["sub"]), role=payload["role"])
    except (JWTError, KeyError, ValueError, ValidationError) as e:
        logger.info("Token rejected: %s", e)
        return None

def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None),
) -> AuthenticatedIdentity:
    """
    Accepts either Authorization: Bearer <token> OR HttpOnly cookie 'access_token'.
    Prefers Authorization header (convenient for Swagger/tests), falls back to cookie.
    The role is taken from the token; it is never re-read from the store.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = None
    if authorization:
        if authorization.startswith("Bearer "):
            token = authorization.split(" ", 1)[1]
        else:
            logger.info("Authorization header present but not Bearer.")

    if not token:
        token = access_token or request.cookies.get("access_token")

    if not token:
        raise credentials_exception

    identity = decode_identity(token)
    if identity is None:
        raise credentials_exception
    return identity
