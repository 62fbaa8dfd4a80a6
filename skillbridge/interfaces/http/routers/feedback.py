"""Peer feedback endpoints."""
from fastapi import APIRouter, Depends, status

from skillbridge.core.security import get_current_user
from skillbridge.interfaces.http.deps import get_feedback_service
from skillbridge.modules.feedback import FeedbackInput, FeedbackService
from skillbridge.modules.users import User
from skillbridge.schemas import (
    FeedbackCreateRequest,
    FeedbackListResponse,
    FeedbackResponse,
    PendingFeedbackListResponse,
    PendingFeedbackResponse,
)

router = APIRouter()


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED, summary="Rate another user")
async def submit_feedback(
    payload: FeedbackCreateRequest,
    user: User = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackResponse:
    record = await service.submit(
        FeedbackInput(
            rater_id=user.id,
            ratee_id=payload.to_user_id,
            skill=payload.skill,
            rating=payload.rating,
            comment=payload.comment,
            meeting_id=payload.meeting_id,
        )
    )
    return FeedbackResponse.model_validate(record)


@router.get("", response_model=FeedbackListResponse, include_in_schema=False)
@router.get("/received", response_model=FeedbackListResponse, summary="Feedback about the current user")
async def list_received(
    user: User = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackListResponse:
    records = await service.list_received(user.id)
    return FeedbackListResponse(feedback=[FeedbackResponse.model_validate(record) for record in records])


@router.get("/given", response_model=FeedbackListResponse, summary="Feedback the current user wrote")
async def list_given(
    user: User = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackListResponse:
    records = await service.list_given(user.id)
    return FeedbackListResponse(feedback=[FeedbackResponse.model_validate(record) for record in records])


@router.get("/pending", response_model=PendingFeedbackListResponse, summary="Completed sessions still awaiting feedback")
async def list_pending(
    user: User = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> PendingFeedbackListResponse:
    pending = await service.list_pending(user.id)
    return PendingFeedbackListResponse(pending=[PendingFeedbackResponse.model_validate(item) for item in pending])
