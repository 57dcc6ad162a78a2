# mentormatch/utils/response_enricher.py
from typing import List
from ..config import get_settings
from ..models import User, UserRole, MatchRequest, Feedback
from ..schemas import (
    UserProfile, ProfileDetails, MentorSummary, MatchRequestResponse, IncomingMatchRequest,
    OutgoingMatchRequest, HistoryMatchRequest, FeedbackResponse, ReceivedFeedback, ReviewerInfo,
)

class ResponseEnricher:
    @staticmethod
    def image_url(user: User) -> str:
        """Derived avatar URL, or a role-labelled placeholder when none is stored"""
        if user.has_avatar:
            return f"/api/images/{user.role}/{user.id}"
        return get_settings().PLACEHOLDER_IMAGE_URL.format(role=user.role.upper())

    @classmethod
    def profile(cls, user: User) -> UserProfile:
        """Public view of a user; never includes credential material"""
        is_mentor = user.role == UserRole.MENTOR.value
        return UserProfile(
            id=user.id,
            email=user.email,
            role=user.role,
            profile=ProfileDetails(
                name=user.name,
                bio=user.bio or "",
                imageUrl=cls.image_url(user),
                skills=list(user.skills or []) if is_mentor else None,
            ),
        )

    @classmethod
    def mentor_summaries(cls, mentors: List[User]) -> List[MentorSummary]:
        return [MentorSummary(**cls.profile(m).model_dump()) for m in mentors]

    @staticmethod
    def request(req: MatchRequest) -> MatchRequestResponse:
        return MatchRequestResponse(
            id=req.id,
            mentorId=req.mentor_id,
            menteeId=req.mentee_id,
            message=req.message,
            status=req.status,
            createdAt=req.created_at,
            updatedAt=req.updated_at,
        )

    @classmethod
    def incoming(cls, views) -> List[IncomingMatchRequest]:
        return [
            IncomingMatchRequest(
                **cls.request(v.request).model_dump(),
                menteeName=v.request.mentee.name if v.request.mentee else None,
                hasFeedback=v.has_feedback,
            )
            for v in views
        ]

    @staticmethod
    def outgoing(views) -> List[OutgoingMatchRequest]:
        return [
            OutgoingMatchRequest(
                id=v.request.id,
                mentorId=v.request.mentor_id,
                menteeId=v.request.mentee_id,
                mentorName=v.request.mentor.name if v.request.mentor else None,
                status=v.request.status,
                createdAt=v.request.created_at,
                updatedAt=v.request.updated_at,
                hasFeedback=v.has_feedback,
            )
            for v in views
        ]

    @classmethod
    def history(cls, views) -> List[HistoryMatchRequest]:
        return [
            HistoryMatchRequest(**cls.request(v.request).model_dump(), hasFeedback=v.has_feedback)
            for v in views
        ]

    @staticmethod
    def feedback(item: Feedback) -> FeedbackResponse:
        return FeedbackResponse(
            id=item.id,
            matchRequestId=item.match_request_id,
            reviewerId=item.reviewer_id,
            revieweeId=item.reviewee_id,
            rating=item.rating,
            comment=item.comment,
            createdAt=item.created_at,
        )

    @staticmethod
    def received(items: List[Feedback]) -> List[ReceivedFeedback]:
        """Received feedback joined with reviewer name and role"""
        return [
            ReceivedFeedback(
                id=f.id,
                matchRequestId=f.match_request_id,
                rating=f.rating,
                comment=f.comment,
                createdAt=f.created_at,
                reviewer=ReviewerInfo(name=f.reviewer.name, role=f.reviewer.role),
            )
            for f in items
        ]
