"""Pydantic schemas used by the HTTP layer.

Payloads use camelCase on the wire; attributes stay snake_case in Python.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TokenData(BaseModel):
    user_id: str
    email: str


class RegisterRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class LoginRequest(APIModel):
    email: str
    password: str


class TeachingSkillResponse(APIModel):
    id: str
    name: str
    sessions: int
    rating: float


class CertificationResponse(APIModel):
    id: str
    name: str
    issuer: Optional[str] = None
    year: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_mime_type: Optional[str] = None


class UserStatsResponse(APIModel):
    sessions_taught: int
    sessions_learned: int
    avg_rating: float


class UserResponse(APIModel):
    id: str
    name: str
    email: str
    role: str
    bio: str = ""
    location: str = ""
    languages: list[str] = Field(default_factory=list)
    timezone: str = ""
    avatar_url: str = ""
    skills_teaching: list[TeachingSkillResponse] = Field(default_factory=list)
    skills_learning: list[str] = Field(default_factory=list)
    certifications: list[CertificationResponse] = Field(default_factory=list)
    stats: UserStatsResponse
    created_at: Optional[datetime] = None


class UserListResponse(APIModel):
    total: int
    users: list[UserResponse]


class AuthResponse(APIModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdateRequest(APIModel):
    name: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=100)
    languages: Optional[list[str]] = None
    timezone: Optional[str] = Field(default=None, max_length=64)


class AvatarRequest(APIModel):
    url: str = Field(..., min_length=1, max_length=500)
    public_id: str = ""


class SkillRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=100)


class CertificationRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=150)
    issuer: Optional[str] = None
    year: Optional[str] = None
    file_url: Optional[str] = None
    file_public_id: Optional[str] = None
    file_name: Optional[str] = None
    file_mime_type: Optional[str] = None


class MonthlyStatsResponse(APIModel):
    earned: int
    spent: int


class WalletResponse(APIModel):
    balance: int
    total_earned: int
    total_spent: int
    monthly: MonthlyStatsResponse


class TransactionResponse(APIModel):
    id: int
    type: str
    amount: int
    description: str
    meeting_id: Optional[str] = None
    counterparty_id: Optional[str] = None
    created_at: datetime


class TransactionListResponse(APIModel):
    transactions: list[TransactionResponse]
    total: int
    has_more: bool


class BalanceCheckResponse(APIModel):
    balance: int
    session_cost: int
    can_afford_session: bool


class MeetingCreateRequest(APIModel):
    other_user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    starts_at: str
    session_type: Literal["teaching", "learning"]
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    skill: Optional[str] = Field(default=None, max_length=100)
    conversation_id: Optional[str] = Field(default=None, max_length=64)


class MeetingResponse(APIModel):
    id: str
    creator_id: str
    partner_id: str
    title: str
    starts_at: datetime
    duration_minutes: int
    session_type: str
    status: str
    provider: str
    room_name: str
    join_url: str
    skill: Optional[str] = None
    rating: Optional[int] = None
    conversation_id: Optional[str] = None
    created_at: Optional[datetime] = None


class MeetingListResponse(APIModel):
    meetings: list[MeetingResponse]


class ScheduleResponse(APIModel):
    meeting: MeetingResponse
    transaction_id: int
    new_balance: int


class RateRequest(APIModel):
    rating: int


class FeedbackCreateRequest(APIModel):
    to_user_id: str = Field(..., min_length=1)
    skill: str = Field(..., min_length=1, max_length=100)
    rating: int
    comment: Optional[str] = None
    meeting_id: Optional[str] = None


class FeedbackResponse(APIModel):
    id: str
    from_user_id: str
    to_user_id: str
    skill: str
    rating: int
    comment: str = ""
    meeting_id: Optional[str] = None
    created_at: Optional[datetime] = None


class FeedbackListResponse(APIModel):
    feedback: list[FeedbackResponse]


class PendingFeedbackResponse(APIModel):
    meeting_id: str
    other_user_id: str
    title: str
    skill: Optional[str] = None
    starts_at: datetime


class PendingFeedbackListResponse(APIModel):
    pending: list[PendingFeedbackResponse]


class ConversationCreateRequest(APIModel):
    other_user_id: str = Field(..., min_length=1)


class ChatParticipantResponse(APIModel):
    id: str
    name: str
    avatar_url: str = ""


class ChatMessageResponse(APIModel):
    id: int
    conversation_id: str
    sender_id: str
    recipient_id: str
    text: str
    read: bool = False
    created_at: Optional[datetime] = None


class ConversationResponse(APIModel):
    id: str
    participants: list[str]
    other_user: Optional[ChatParticipantResponse] = None
    last_message: Optional[ChatMessageResponse] = None
    unread_count: int = 0
    updated_at: Optional[datetime] = None


class ConversationListResponse(APIModel):
    conversations: list[ConversationResponse]


class MessageCreateRequest(APIModel):
    text: str = Field(..., min_length=1)


class MessageListResponse(APIModel):
    messages: list[ChatMessageResponse]
    has_more: bool


class MarkReadResponse(APIModel):
    updated: int


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
