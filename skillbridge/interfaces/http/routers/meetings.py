"""Session scheduling and lifecycle endpoints."""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.security import get_current_user
from skillbridge.interfaces.http.deps import get_db_session, get_meeting_service, get_notification_service
from skillbridge.modules.meetings import Meeting, MeetingScheduleInput, MeetingService
from skillbridge.modules.notifications import MEETING_CANCELLED, MEETING_INVITED, NotificationService
from skillbridge.modules.users import User
from skillbridge.schemas import (
    MeetingCreateRequest,
    MeetingListResponse,
    MeetingResponse,
    RateRequest,
    ScheduleResponse,
)

router = APIRouter()


def _to_response(meeting: Meeting) -> MeetingResponse:
    return MeetingResponse.model_validate(meeting)


@router.get("", response_model=MeetingListResponse, summary="Upcoming sessions (completes expired ones first)")
async def list_upcoming(
    user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
) -> MeetingListResponse:
    meetings = await service.list_upcoming(user.id)
    return MeetingListResponse(meetings=[_to_response(meeting) for meeting in meetings])


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED, summary="Schedule a session")
async def schedule_meeting(
    payload: MeetingCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    service: MeetingService = Depends(get_meeting_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> ScheduleResponse:
    result = await service.schedule(
        MeetingScheduleInput(
            creator_id=user.id,
            participant_id=payload.other_user_id,
            title=payload.title,
            starts_at=payload.starts_at,
            session_type=payload.session_type,
            duration_minutes=payload.duration_minutes,
            skill=payload.skill,
            conversation_id=payload.conversation_id,
        )
    )
    await db.commit()

    meeting = _to_response(result.meeting)
    await notifications.notify(
        result.meeting.partner_id,
        MEETING_INVITED,
        {"meeting": meeting.model_dump(mode="json", by_alias=True), "from": {"id": user.id, "name": user.name}},
    )
    return ScheduleResponse(meeting=meeting, transaction_id=result.transaction_id, new_balance=result.balance)


@router.get("/history", response_model=MeetingListResponse, summary="Past and present sessions, newest first")
async def list_history(
    status_filter: Optional[Literal["scheduled", "completed", "cancelled", "all"]] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
) -> MeetingListResponse:
    meetings = await service.list_history(user.id, status=status_filter, limit=limit)
    return MeetingListResponse(meetings=[_to_response(meeting) for meeting in meetings])


@router.get("/{meeting_id}", response_model=MeetingResponse, summary="Read one session")
async def read_meeting(
    meeting_id: str,
    user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
) -> MeetingResponse:
    return _to_response(await service.get(user.id, meeting_id))


@router.post("/{meeting_id}/cancel", response_model=MeetingResponse, summary="Cancel a scheduled session")
async def cancel_meeting(
    meeting_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    service: MeetingService = Depends(get_meeting_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> MeetingResponse:
    meeting = await service.cancel(user.id, meeting_id)
    await db.commit()

    response = _to_response(meeting)
    await notifications.notify(
        meeting.other_participant(user.id),
        MEETING_CANCELLED,
        {"meeting": response.model_dump(mode="json", by_alias=True), "cancelledBy": user.id},
    )
    return response


@router.post("/{meeting_id}/rate", response_model=MeetingResponse, summary="Learner rates a completed session")
async def rate_meeting(
    meeting_id: str,
    payload: RateRequest,
    user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
) -> MeetingResponse:
    return _to_response(await service.rate(user.id, meeting_id, payload.rating))


@router.delete("/{meeting_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a session (creator only)")
async def delete_meeting(
    meeting_id: str,
    user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
) -> Response:
    await service.delete(user.id, meeting_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
