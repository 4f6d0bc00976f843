"""Protocol for connection cache observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionCacheProbe(Protocol):
    """Domain probe for the per-database connection cache."""

    def entry_created(self, database_name: str) -> None:
        """Record that a handle was created and cached for a database."""
        ...

    def entry_evicted(self, database_name: str) -> None:
        """Record that an entry was removed and its handle disposed."""
        ...

    def entries_disposed(self, count: int) -> None:
        """Record that every cached handle was disposed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionCacheProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionCacheProbe:
    """Default implementation of ConnectionCacheProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionCacheProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionCacheProbe(logger=self._logger, context=context)

    def entry_created(self, database_name: str) -> None:
        self._logger.info(
            "tenant_connection_cached",
            database_name=database_name,
            **self._get_context_kwargs(),
        )

    def entry_evicted(self, database_name: str) -> None:
        self._logger.info(
            "tenant_connection_evicted",
            database_name=database_name,
            **self._get_context_kwargs(),
        )

    def entries_disposed(self, count: int) -> None:
        self._logger.info(
            "tenant_connections_disposed",
            count=count,
            **self._get_context_kwargs(),
        )
