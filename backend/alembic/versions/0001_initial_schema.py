"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-16

Creates all tables for the FlourishTalents events backend:
users, events, service_providers, event_service_bookings,
event_memories, event_comments, user_calendar_events.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EVENT_CATEGORIES = ("social", "networking", "business", "workshop", "conference", "entertainment")
EVENT_STATUSES = ("upcoming", "ongoing", "completed", "cancelled")
PROVIDER_CATEGORIES = (
    "venue", "catering", "decor", "audio", "photography",
    "entertainment", "security", "transport", "ushering",
)
BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("professional_title", sa.String(150), nullable=True),
        sa.Column("avatar_url", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organizer_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("organizer_name", sa.String(150), nullable=True),
        sa.Column("organizer_specification", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("category", sa.Enum(*EVENT_CATEGORIES, name="eventcategory"), nullable=False),
        sa.Column("event_date", sa.Date, nullable=False),
        sa.Column("event_time", sa.Time, nullable=True),
        sa.Column("location", sa.String(500), nullable=False, server_default=""),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("attendees_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("attractions", sa.JSON, nullable=False),
        sa.Column("features", sa.JSON, nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("thumbnail_url", sa.String(1000), nullable=True),
        sa.Column("is_livestream", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("livestream_url", sa.String(1000), nullable=True),
        sa.Column("status", sa.Enum(*EVENT_STATUSES, name="eventstatus"), nullable=False),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_visible_in_join_tab", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_visible_in_my_events", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_from_join_tab_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_from_my_events_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_join_tab", "events", ["is_published", "is_visible_in_join_tab", "event_date"])
    op.create_index("ix_events_organizer", "events", ["organizer_id", "is_visible_in_my_events"])

    # --- service_providers ---
    op.create_table(
        "service_providers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("category", sa.Enum(*PROVIDER_CATEGORIES, name="providercategory"), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("expertise", sa.String(255), nullable=False, server_default=""),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("reviews_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("contact_email", sa.String(255), nullable=False, server_default=""),
        sa.Column("contact_phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("portfolio_images", sa.JSON, nullable=False),
        sa.Column("available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- event_service_bookings ---
    op.create_table(
        "event_service_bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("provider_id", sa.String(36), sa.ForeignKey("service_providers.id"), nullable=False),
        sa.Column("provider_name", sa.String(150), nullable=False),
        sa.Column("provider_category", sa.String(50), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("booking_status", sa.Enum(*BOOKING_STATUSES, name="bookingstatus"), nullable=False),
        sa.Column("special_notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- event_memories ---
    op.create_table(
        "event_memories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("user_avatar", sa.String(1000), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=False),
        sa.Column("caption", sa.Text, nullable=False, server_default=""),
        sa.Column("likes_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("comments_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- event_comments ---
    op.create_table(
        "event_comments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("memory_id", sa.String(36), sa.ForeignKey("event_memories.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("user_avatar", sa.String(1000), nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("likes_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- user_calendar_events ---
    op.create_table(
        "user_calendar_events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("reminder_enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("reminder_type", sa.Enum("in_app", "email", "push", "all", name="remindertype"), nullable=True),
        sa.Column(
            "reminder_time_before",
            sa.Enum("fifteen_minutes", "one_hour", "one_day", "one_week", name="reminderlead"),
            nullable=True,
        ),
        sa.Column("added_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "event_id", name="uq_user_calendar_event"),
    )


def downgrade() -> None:
    op.drop_table("user_calendar_events")
    op.drop_table("event_comments")
    op.drop_table("event_memories")
    op.drop_table("event_service_bookings")
    op.drop_table("service_providers")
    op.drop_index("ix_events_organizer", table_name="events")
    op.drop_index("ix_events_join_tab", table_name="events")
    op.drop_table("events")
    op.drop_table("users")
