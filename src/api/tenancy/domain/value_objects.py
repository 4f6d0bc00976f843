"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import StrEnum

from tenancy.ports.exceptions import TenantCodeRequiredError

DEFAULT_DATABASE_NAME_MAX_LENGTH = 63

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class PropertyCode:
    """Normalized property (tenant) code.

    All comparisons between codes use the normalized form: surrounding
    whitespace removed and upper-cased.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def normalize(cls, raw: str | None) -> PropertyCode:
        """Create a PropertyCode from caller input.

        Args:
            raw: Code as supplied by a header, token claim or CLI argument

        Returns:
            PropertyCode with the normalized value

        Raises:
            TenantCodeRequiredError: If the input is None, empty or blank
        """
        if raw is None or not str(raw).strip():
            raise TenantCodeRequiredError("A property code is required")
        return cls(value=str(raw).strip().upper())


def sanitize_database_name(
    value: str | None,
    max_length: int = DEFAULT_DATABASE_NAME_MAX_LENGTH,
) -> str:
    """Derive an identifier-safe database name from arbitrary text.

    Lower-cases, collapses runs of non-alphanumerics to ``_``, strips
    leading/trailing underscores and truncates. Falls back to a
    timestamp-based name when nothing usable remains.
    """
    collapsed = _NON_ALPHANUMERIC.sub("_", (value or "").lower()).strip("_")
    if not collapsed:
        return f"property_{int(time.time() * 1000)}"
    return collapsed[:max_length]


def database_name_from_code(
    code: PropertyCode,
    max_length: int = DEFAULT_DATABASE_NAME_MAX_LENGTH,
) -> str:
    """Default database name for a property code.

    Deterministic for any code containing an alphanumeric character, so the
    default database can be probed without a lookup.
    """
    return sanitize_database_name(code.value, max_length=max_length)


class EntityName(StrEnum):
    """Closed set of entities stored in every property database.

    Values are the logical entity names used across the back-office.
    """

    PROPERTY = "Property"
    USER = "User"
    RESERVATION = "Reservation"
    ROOM_TYPE = "RoomType"
    ROOM = "Room"
    DAILY_RATE = "DailyRate"
    INVENTORY_BLOCK = "InventoryBlock"
    GUEST_PROFILE = "GuestProfile"
    CAMPAIGN = "Campaign"
    CONVERSATION = "Conversation"
    MESSAGE = "Message"
    MESSAGE_TEMPLATE = "MessageTemplate"
    EMAIL_TEMPLATE = "EmailTemplate"
    REVIEW = "Review"
    GUEST_FOLIO = "GuestFolio"
    BILL = "Bill"
    PROPERTY_DETAILS = "PropertyDetails"
    EMAIL_INTEGRATION = "EmailIntegration"
    TAX_RULE = "TaxRule"
    SERVICE_FEE = "ServiceFee"
    AI_SETTINGS = "AISettings"
    REPORT_SNAPSHOT = "ReportSnapshot"
    PROMOTION = "Promotion"
    MAINTENANCE_LOG = "MaintenanceLog"
    HOUSEKEEPING_MESSAGE = "HousekeepingMessage"


class PropertyStatus(StrEnum):
    """Operational status of a property."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
