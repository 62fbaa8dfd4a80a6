"""1:1 chat endpoints. New messages are also pushed to the recipient's socket."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.security import get_current_user
from skillbridge.interfaces.http.deps import get_conversation_service, get_db_session, get_notification_service
from skillbridge.modules.conversations import ConversationService
from skillbridge.modules.notifications import MESSAGE_NEW, NotificationService
from skillbridge.modules.users import User
from skillbridge.schemas import (
    ChatMessageResponse,
    ConversationCreateRequest,
    ConversationListResponse,
    ConversationResponse,
    MarkReadResponse,
    MessageCreateRequest,
    MessageListResponse,
)

router = APIRouter()


@router.get("/conversations", response_model=ConversationListResponse, summary="Conversations, most recent first")
async def list_conversations(
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationListResponse:
    conversations = await service.list_for(user.id)
    return ConversationListResponse(
        conversations=[ConversationResponse.model_validate(conversation) for conversation in conversations]
    )


@router.post("/conversations", response_model=ConversationResponse, summary="Open (or reopen) a conversation")
async def open_conversation(
    payload: ConversationCreateRequest,
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationResponse:
    return ConversationResponse.model_validate(await service.open(user.id, payload.other_user_id))


@router.get("/conversations/{conversation_id}/messages", response_model=MessageListResponse, summary="Page of messages")
async def list_messages(
    conversation_id: str,
    limit: Optional[int] = Query(None, ge=1),
    before: Optional[int] = Query(None, description="Only messages with a smaller id"),
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> MessageListResponse:
    page = await service.list_messages(user.id, conversation_id, limit=limit, before_id=before)
    return MessageListResponse(
        messages=[ChatMessageResponse.model_validate(message) for message in page.messages],
        has_more=page.has_more,
    )


@router.post("/conversations/{conversation_id}/read", response_model=MarkReadResponse, summary="Mark messages read")
async def mark_read(
    conversation_id: str,
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> MarkReadResponse:
    return MarkReadResponse(updated=await service.mark_read(user.id, conversation_id))


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
async def send_message(
    conversation_id: str,
    payload: MessageCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    service: ConversationService = Depends(get_conversation_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> ChatMessageResponse:
    message = await service.send(user.id, conversation_id, payload.text)
    await db.commit()

    response = ChatMessageResponse.model_validate(message)
    await notifications.notify(
        message.recipient_id,
        MESSAGE_NEW,
        {"message": response.model_dump(mode="json", by_alias=True), "from": {"id": user.id, "name": user.name}},
    )
    return response
