"""SQLAlchemy ORM models for rooms, rates and reservations."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    DocumentMixin,
    PropertyScopedMixin,
    TimestampMixin,
)


class RoomTypeModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for room_types table."""

    __tablename__ = "room_types"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False, default=2)


class RoomModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for rooms table."""

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    room_number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    room_type_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="available")


class ReservationModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for reservations table."""

    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_type_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    check_in: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="confirmed")


class DailyRateModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for daily_rates table."""

    __tablename__ = "daily_rates"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    room_type_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    stay_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


class InventoryBlockModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for inventory_blocks table."""

    __tablename__ = "inventory_blocks"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    room_type_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    rooms_blocked: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
