"""initial schema: profiles, ledger, sessions, feedback

Revision ID: 5b1e0c7d2a94
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5b1e0c7d2a94"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255)),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        sa.Column("bio", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("location", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("languages", sa.JSON(), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("avatar_url", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("avatar_public_id", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("sessions_taught", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sessions_learned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("avg_rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "teaching_skills",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("sessions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_teaching_skills_user_id", "teaching_skills", ["user_id"])

    op.create_table(
        "learning_goals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_learning_goals_user_id", "learning_goals", ["user_id"])

    op.create_table(
        "certifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("issuer", sa.String(length=150)),
        sa.Column("year", sa.String(length=10)),
        sa.Column("file_url", sa.String(length=500)),
        sa.Column("file_public_id", sa.String(length=255)),
        sa.Column("file_name", sa.String(length=255)),
        sa.Column("file_mime_type", sa.String(length=100)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_certifications_user_id", "certifications", ["user_id"])

    op.create_table(
        "wallets",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_earned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_spent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
    )

    op.create_table(
        "meetings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("creator_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("partner_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("conversation_id", sa.String(length=64)),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("provider", sa.String(length=20), nullable=False, server_default="jitsi"),
        sa.Column("room_name", sa.String(length=255), nullable=False),
        sa.Column("join_url", sa.String(length=500), nullable=False),
        sa.Column("session_type", sa.String(length=20), nullable=False),
        sa.Column("skill", sa.String(length=100)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="scheduled"),
        sa.Column("rating", sa.Integer()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_meetings_rating_range"),
    )
    op.create_index("ix_meetings_creator_id", "meetings", ["creator_id"])
    op.create_index("ix_meetings_partner_id", "meetings", ["partner_id"])
    op.create_index("ix_meetings_status_starts_at", "meetings", ["status", "starts_at"])

    op.create_table(
        "credit_transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("meeting_id", sa.String(length=36), sa.ForeignKey("meetings.id", ondelete="SET NULL")),
        sa.Column("counterparty_id", sa.String(length=36), sa.ForeignKey("users.id")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_credit_transactions_user_created", "credit_transactions", ["user_id", "created_at"])
    op.create_index("ix_credit_transactions_meeting_id", "credit_transactions", ["meeting_id"])

    op.create_table(
        "feedback",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("from_user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("to_user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("meeting_id", sa.String(length=36), sa.ForeignKey("meetings.id", ondelete="SET NULL")),
        sa.Column("skill", sa.String(length=100), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("from_user_id", "to_user_id", "meeting_id", name="uq_feedback_rater_ratee_meeting"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )
    op.create_index("ix_feedback_from_user_id", "feedback", ["from_user_id"])
    op.create_index("ix_feedback_to_user_id", "feedback", ["to_user_id"])


def downgrade() -> None:
    op.drop_index("ix_feedback_to_user_id", table_name="feedback")
    op.drop_index("ix_feedback_from_user_id", table_name="feedback")
    op.drop_table("feedback")

    op.drop_index("ix_credit_transactions_meeting_id", table_name="credit_transactions")
    op.drop_index("ix_credit_transactions_user_created", table_name="credit_transactions")
    op.drop_table("credit_transactions")

    op.drop_index("ix_meetings_status_starts_at", table_name="meetings")
    op.drop_index("ix_meetings_partner_id", table_name="meetings")
    op.drop_index("ix_meetings_creator_id", table_name="meetings")
    op.drop_table("meetings")

    op.drop_table("wallets")

    op.drop_index("ix_certifications_user_id", table_name="certifications")
    op.drop_table("certifications")
    op.drop_index("ix_learning_goals_user_id", table_name="learning_goals")
    op.drop_table("learning_goals")
    op.drop_index("ix_teaching_skills_user_id", table_name="teaching_skills")
    op.drop_table("teaching_skills")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
