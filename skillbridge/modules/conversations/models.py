"""Domain models for 1:1 chat."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class ChatParticipant:
    id: str
    name: str
    avatar_url: str = ""


@dataclass(slots=True)
class ChatMessage:
    id: int
    conversation_id: str
    sender_id: str
    recipient_id: str
    text: str
    read: bool = False
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class Conversation:
    id: str
    participants: tuple[str, str]
    other_user: Optional[ChatParticipant] = None
    last_message: Optional[ChatMessage] = None
    unread_count: int = 0
    updated_at: Optional[datetime] = None

    def is_participant(self, user_id: str) -> bool:
        return user_id in self.participants

    def other_participant(self, user_id: str) -> str:
        first, second = self.participants
        return second if user_id == first else first


@dataclass(slots=True)
class MessagePage:
    messages: list[ChatMessage] = field(default_factory=list)
    has_more: bool = False
