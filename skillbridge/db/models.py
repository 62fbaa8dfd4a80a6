"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skillbridge.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255))
    role = Column(String(20), nullable=False, default="user")
    bio = Column(String(500), nullable=False, default="")
    location = Column(String(100), nullable=False, default="")
    languages = Column(JSON, nullable=False, default=list)
    timezone = Column(String(64), nullable=False, default="")
    avatar_url = Column(String(500), nullable=False, default="")
    avatar_public_id = Column(String(255), nullable=False, default="")
    # derived statistics, written by the reputation module only
    sessions_taught = Column(Integer, nullable=False, default=0)
    sessions_learned = Column(Integer, nullable=False, default=0)
    avg_rating = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    skills_teaching = relationship(
        "TeachingSkill",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="TeachingSkill.created_at",
    )
    skills_learning = relationship(
        "LearningGoal",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="LearningGoal.id",
    )
    certifications = relationship(
        "Certification",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Certification.created_at",
    )


class TeachingSkill(Base):
    __tablename__ = "teaching_skills"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    sessions = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    user = relationship("User", back_populates="skills_teaching")


class LearningGoal(Base):
    __tablename__ = "learning_goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    user = relationship("User", back_populates="skills_learning")


class Certification(Base):
    __tablename__ = "certifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    issuer = Column(String(150))
    year = Column(String(10))
    file_url = Column(String(500))
    file_public_id = Column(String(255))
    file_name = Column(String(255))
    file_mime_type = Column(String(100))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    user = relationship("User", back_populates="certifications")


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),)

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    balance = Column(Integer, nullable=False, default=0)
    total_earned = Column(Integer, nullable=False, default=0)
    total_spent = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    user = relationship("User")


class CreditTransaction(Base):
    __tablename__ = "credit_transactions"
    __table_args__ = (Index("ix_credit_transactions_user_created", "user_id", "created_at"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    type = Column(String(20), nullable=False)  # teaching, learning, purchase, bonus, refund
    amount = Column(Integer, nullable=False)
    description = Column(String(255), nullable=False)
    meeting_id = Column(String(36), ForeignKey("meetings.id", ondelete="SET NULL"), nullable=True, index=True)
    counterparty_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    meeting = relationship("Meeting")


class Meeting(Base):
    __tablename__ = "meetings"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_meetings_rating_range"),
        Index("ix_meetings_status_starts_at", "status", "starts_at"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    partner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    conversation_id = Column(String(64))
    title = Column(String(255), nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    provider = Column(String(20), nullable=False, default="jitsi")
    room_name = Column(String(255), nullable=False)
    join_url = Column(String(500), nullable=False)
    session_type = Column(String(20), nullable=False)  # teaching, learning (creator's perspective)
    skill = Column(String(100))
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled, completed, cancelled
    rating = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    creator = relationship("User", foreign_keys=[creator_id])
    partner = relationship("User", foreign_keys=[partner_id])


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("from_user_id", "to_user_id", "meeting_id", name="uq_feedback_rater_ratee_meeting"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    from_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    to_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    meeting_id = Column(String(36), ForeignKey("meetings.id", ondelete="SET NULL"), nullable=True)
    skill = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    from_user = relationship("User", foreign_keys=[from_user_id])
    to_user = relationship("User", foreign_keys=[to_user_id])
    meeting = relationship("Meeting")


class Conversation(Base):
    """A 1:1 chat thread. The pair is stored ordered so each pair has one row."""

    __tablename__ = "conversations"
    __table_args__ = (UniqueConstraint("user_a_id", "user_b_id", name="uq_conversations_pair"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_a_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user_b_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    # bumped on every new message; conversations are listed by it
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class ChatMessage(Base):
    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_conversation_id_id", "conversation_id", "id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    read_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    conversation = relationship("Conversation")
