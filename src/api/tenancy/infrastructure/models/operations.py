"""SQLAlchemy ORM models for reporting, distribution and housekeeping."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    DocumentMixin,
    PropertyScopedMixin,
    TimestampMixin,
)


class ReportSnapshotModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for report_snapshots table."""

    __tablename__ = "report_snapshots"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    report_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    business_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)


class PromotionModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for promotions table."""

    __tablename__ = "promotions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    promo_code: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_to: Mapped[date | None] = mapped_column(Date, nullable=True)


class MaintenanceLogModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for maintenance_logs table."""

    __tablename__ = "maintenance_logs"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    room_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")


class HousekeepingMessageModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for housekeeping_messages table."""

    __tablename__ = "housekeeping_messages"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    room_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    sender_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
