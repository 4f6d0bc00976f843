"""SQLAlchemy ORM models for folios, bills, taxes and fees.

Amounts are stored for lookup and reporting only; folio arithmetic is
owned elsewhere.
"""

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    DocumentMixin,
    PropertyScopedMixin,
    TimestampMixin,
)


class GuestFolioModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for guest_folios table."""

    __tablename__ = "guest_folios"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    reservation_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")
    balance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)


class BillModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for bills table."""

    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    folio_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    bill_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)


class TaxRuleModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for tax_rules table."""

    __tablename__ = "tax_rules"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    rate_percent: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ServiceFeeModel(Base, PropertyScopedMixin, DocumentMixin, TimestampMixin):
    """ORM model for service_fees table."""

    __tablename__ = "service_fees"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
