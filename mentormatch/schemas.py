from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .models import MatchStatus, UserRole
from .constants import BusinessRules

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# --- Authentication Schemas ---

class AuthenticatedIdentity(BaseModel):
    """Verified (user id, role) pair handed to every core operation."""
    user_id: int
    role: UserRole

    model_config = ConfigDict(frozen=True)

class UserCreate(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=BusinessRules.MIN_PASSWORD_LENGTH)
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole
    bio: Optional[str] = None
    # Either a list or a comma-delimited string, normalised on write
    skills: Optional[Union[List[str], str]] = None

class UserLogin(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str

class SignupResponse(BaseModel):
    message: str = "User created successfully"
    userId: int

class Token(BaseModel):
    token: str
    token_type: str = "bearer"

# --- Profile Schemas ---

class ProfileDetails(BaseModel):
    name: str
    bio: str
    imageUrl: str
    skills: Optional[List[str]] = None

class UserProfile(BaseModel):
    id: int
    email: str
    role: UserRole
    profile: ProfileDetails

class ProfileUpdate(BaseModel):
    id: Optional[int] = Field(None, description="Must match the authenticated user when given.")
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[UserRole] = Field(None, description="Accepted only when unchanged.")
    bio: Optional[str] = None
    skills: Optional[Union[List[str], str]] = None
    image: Optional[str] = Field(None, description="data:image/(jpeg|png);base64,... URL")

class MentorSummary(UserProfile):
    pass

# --- Match Request Schemas ---

class MatchRequestCreate(BaseModel):
    mentorId: int
    message: str = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value

class MatchRequestResponse(BaseModel):
    id: int
    mentorId: int
    menteeId: int
    message: str
    status: MatchStatus
    createdAt: datetime
    updatedAt: datetime

class IncomingMatchRequest(MatchRequestResponse):
    menteeName: Optional[str] = None
    hasFeedback: bool

class OutgoingMatchRequest(BaseModel):
    # The mentee's own message is not echoed back in this view
    id: int
    mentorId: int
    menteeId: int
    mentorName: Optional[str] = None
    status: MatchStatus
    createdAt: datetime
    updatedAt: datetime
    hasFeedback: bool

class HistoryMatchRequest(MatchRequestResponse):
    hasFeedback: bool

# --- Feedback Schemas ---

class FeedbackCreate(BaseModel):
    matchRequestId: int = Field(..., gt=0)
    revieweeId: int = Field(..., gt=0)
    # Range is checked by the ledger so the failure order stays fixed
    rating: int
    comment: Optional[str] = None

class FeedbackResponse(BaseModel):
    id: int
    matchRequestId: int
    reviewerId: int
    revieweeId: int
    rating: int
    comment: Optional[str]
    createdAt: datetime

class ReviewerInfo(BaseModel):
    name: str
    role: UserRole

class ReceivedFeedback(BaseModel):
    id: int
    matchRequestId: int
    rating: int
    comment: Optional[str]
    createdAt: datetime
    reviewer: ReviewerInfo
