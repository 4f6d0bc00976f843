"""Protocol for tenant resolution observability.

Defines the interface for domain probes that capture the decisions the
resolver makes: fast-path hits, discovery, stale bindings and overrides.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolution."""

    def tenant_resolved(self, code: str, database_name: str, source: str) -> None:
        """Record that a property code was resolved to a database."""
        ...

    def stale_binding_detected(self, code: str, database_name: str) -> None:
        """Record that a cached binding no longer holds the property."""
        ...

    def discovery_started(self, code: str, candidate_count: int) -> None:
        """Record that exhaustive discovery began."""
        ...

    def candidate_missing(self, code: str, database_name: str) -> None:
        """Record that a probed database or its storage does not exist."""
        ...

    def tenant_discovered(self, code: str, database_name: str, candidates_checked: int) -> None:
        """Record that discovery found the property."""
        ...

    def tenant_not_found(self, code: str, candidates_checked: int) -> None:
        """Record that no candidate database holds the property."""
        ...

    def tenant_known_missing(self, code: str) -> None:
        """Record that a recent not-found result short-circuited resolution."""
        ...

    def preferred_database_applied(self, code: str, found_in: str, preferred: str) -> None:
        """Record that a preferred-database override redirected resolution."""
        ...

    def preferred_database_unavailable(
        self, code: str, found_in: str, preferred: str, reason: str
    ) -> None:
        """Record that an override could not be honoured and was ignored."""
        ...

    def primary_unavailable(self, code: str, error: Exception) -> None:
        """Record that resolution aborted because the store is unreachable."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def tenant_resolved(self, code: str, database_name: str, source: str) -> None:
        self._logger.debug(
            "tenant_resolved",
            property_code=code,
            database_name=database_name,
            source=source,
            **self._get_context_kwargs(),
        )

    def stale_binding_detected(self, code: str, database_name: str) -> None:
        self._logger.warning(
            "tenant_stale_binding_detected",
            property_code=code,
            database_name=database_name,
            **self._get_context_kwargs(),
        )

    def discovery_started(self, code: str, candidate_count: int) -> None:
        self._logger.info(
            "tenant_discovery_started",
            property_code=code,
            candidate_count=candidate_count,
            **self._get_context_kwargs(),
        )

    def candidate_missing(self, code: str, database_name: str) -> None:
        self._logger.debug(
            "tenant_candidate_missing",
            property_code=code,
            database_name=database_name,
            **self._get_context_kwargs(),
        )

    def tenant_discovered(self, code: str, database_name: str, candidates_checked: int) -> None:
        self._logger.info(
            "tenant_discovered",
            property_code=code,
            database_name=database_name,
            candidates_checked=candidates_checked,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, code: str, candidates_checked: int) -> None:
        self._logger.info(
            "tenant_not_found",
            property_code=code,
            candidates_checked=candidates_checked,
            **self._get_context_kwargs(),
        )

    def tenant_known_missing(self, code: str) -> None:
        self._logger.debug(
            "tenant_known_missing",
            property_code=code,
            **self._get_context_kwargs(),
        )

    def preferred_database_applied(self, code: str, found_in: str, preferred: str) -> None:
        self._logger.info(
            "tenant_preferred_database_applied",
            property_code=code,
            found_in=found_in,
            preferred=preferred,
            **self._get_context_kwargs(),
        )

    def preferred_database_unavailable(
        self, code: str, found_in: str, preferred: str, reason: str
    ) -> None:
        self._logger.warning(
            "tenant_preferred_database_unavailable",
            property_code=code,
            found_in=found_in,
            preferred=preferred,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def primary_unavailable(self, code: str, error: Exception) -> None:
        self._logger.error(
            "tenant_resolution_primary_unavailable",
            property_code=code,
            error=str(error),
            **self._get_context_kwargs(),
        )
