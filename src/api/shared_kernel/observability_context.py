"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        property_code: Normalized property (tenant) code, if known.
        database_name: Logical database being operated on, if known.
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", property_code="HSUN")
        probe = DefaultTenantResolverProbe().with_context(context)
    """

    request_id: str | None = None
    property_code: str | None = None
    database_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.property_code is not None:
            result["context_property_code"] = self.property_code
        if self.database_name is not None:
            result["context_database_name"] = self.database_name
        result.update(self.extra)
        return result

    def with_database(self, database_name: str) -> ObservationContext:
        """Create a new context with the database name set."""
        return replace(self, database_name=database_name)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
