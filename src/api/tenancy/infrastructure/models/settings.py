"""SQLAlchemy ORM models for per-property settings documents."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    DocumentMixin,
    PropertyScopedMixin,
    TimestampMixin,
)


class PropertyDetailsModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for property_details table."""

    __tablename__ = "property_details"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    legal_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")


class EmailIntegrationModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for email_integrations table."""

    __tablename__ = "email_integrations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    provider: Mapped[str] = mapped_column(String(64), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class AISettingsModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for ai_settings table."""

    __tablename__ = "ai_settings"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
