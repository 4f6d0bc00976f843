"""SQLAlchemy ORM models for guest management and messaging."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    DocumentMixin,
    PropertyScopedMixin,
    TimestampMixin,
)


class GuestProfileModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for guest_profiles table."""

    __tablename__ = "guest_profiles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)


class CampaignModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for campaigns table."""

    __tablename__ = "campaigns"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft")


class ConversationModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for conversations table."""

    __tablename__ = "conversations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    guest_profile_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    channel: Mapped[str] = mapped_column(String(32), nullable=False)
    last_message_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class MessageModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for messages table."""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    conversation_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    direction: Mapped[str] = mapped_column(String(16), nullable=False)


class MessageTemplateModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for message_templates table."""

    __tablename__ = "message_templates"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    channel: Mapped[str] = mapped_column(String(32), nullable=False)


class EmailTemplateModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for email_templates table."""

    __tablename__ = "email_templates"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(512), nullable=False, default="")


class ReviewModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for reviews table."""

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    source: Mapped[str] = mapped_column(String(64), nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
