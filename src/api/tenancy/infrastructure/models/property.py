"""SQLAlchemy ORM model for the properties table.

Every property database holds exactly the record of the property it
belongs to. Finding that record is how resolution proves ownership.
"""

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PropertyModel(Base, TimestampMixin):
    """ORM model for properties table.

    ``metadata`` is a reserved attribute on declarative classes, so the
    column is mapped as ``property_metadata``.
    """

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="Active")
    property_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )
    allowed_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    mobile_app_version: Mapped[str] = mapped_column(
        String(32), nullable=False, default="1.0.0"
    )
    mobile_app_link: Mapped[str] = mapped_column(String(512), nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PropertyModel(id={self.id}, code={self.code})>"
